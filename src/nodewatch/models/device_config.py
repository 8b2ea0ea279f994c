"""Device configuration models for ``/api/config``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from nodewatch.models.port import MergeMode, PortMode


class PortConfig(BaseModel):
    model_config = {"frozen": False, "extra": "ignore"}

    mode: PortMode = PortMode.DMX_OUTPUT
    universe_primary: int = Field(default=0, ge=0, le=32767)
    merge_mode: MergeMode = MergeMode.HTP
    priority: int | None = Field(default=None, ge=0, le=200)


class NetworkConfig(BaseModel):
    model_config = {"frozen": False, "extra": "ignore"}

    mode: str = "sta"
    wifi_ssid: str = ""
    wifi_password: str | None = Field(default=None, description="Write-only; never read back")
    use_dhcp: bool = True
    static_ip: str = ""
    gateway: str = ""
    netmask: str = ""


class NodeInfo(BaseModel):
    model_config = {"frozen": False, "extra": "ignore"}

    short_name: str = ""
    long_name: str = ""


class DeviceConfig(BaseModel):
    """Full nested device configuration."""
    model_config = {"frozen": False, "extra": "ignore"}

    port1: PortConfig = Field(default_factory=PortConfig)
    port2: PortConfig = Field(default_factory=lambda: PortConfig(universe_primary=1))
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    node_info: NodeInfo = Field(default_factory=NodeInfo)

    def port(self, port: int) -> PortConfig:
        return self.port1 if port == 1 else self.port2


class ActionResult(BaseModel):
    """Acknowledgement returned by fire-and-acknowledge endpoints."""
    model_config = {"frozen": True, "extra": "allow"}

    status: str = "ok"
    message: str | None = None
    port: int | None = None


def port_update(
    port: int,
    *,
    mode: PortMode | int | None = None,
    universe: int | None = None,
    priority: int | None = None,
    merge_mode: MergeMode | int | None = None,
) -> dict[str, Any]:
    """Build a partial config update touching only the given port fields."""
    fields: dict[str, Any] = {}
    if mode is not None:
        fields["mode"] = int(mode)
    if universe is not None:
        fields["universe_primary"] = universe
    if priority is not None:
        fields["priority"] = priority
    if merge_mode is not None:
        fields["merge_mode"] = int(merge_mode)
    return {f"port{port}": fields}


def network_update(config: NetworkConfig) -> dict[str, Any]:
    """Build a partial config update for the network section.

    An empty password is left out so the stored one is kept.
    """
    data = config.model_dump()
    if not data.get("wifi_password"):
        data.pop("wifi_password", None)
    return {"network": data}
