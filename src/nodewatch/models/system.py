"""System health, protocol counter and network status models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from nodewatch.models._fields import Counter


class SystemInfo(BaseModel):
    """Firmware and runtime health reported by ``/api/system/info``."""
    model_config = {"frozen": True, "extra": "ignore"}

    firmware_version: str | None = None
    hardware: str | None = None
    idf_version: str | None = None
    free_heap: int | None = Field(default=None, description="Free heap in bytes")
    uptime_sec: int | None = None


class ArtnetStats(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}

    packets: Counter = 0
    dmx_packets: Counter = 0
    poll_packets: Counter = 0


class SacnStats(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}

    packets: Counter = 0
    data_packets: Counter = 0


class MergeStats(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}

    active_sources: Counter = 0
    total_merges: Counter = 0


class ProtocolStats(BaseModel):
    """Protocol counters reported by ``/api/system/stats``.

    Each section is optional; the device omits a protocol whose receiver
    is not running.
    """
    model_config = {"frozen": True, "extra": "ignore"}

    artnet: ArtnetStats | None = None
    sacn: SacnStats | None = None
    merge: MergeStats | None = None

    def counters(self) -> dict[str, int]:
        """Flatten the monotonic counters into ``section.field`` keys."""
        result: dict[str, int] = {}
        if self.artnet is not None:
            result["artnet.packets"] = self.artnet.packets
            result["artnet.dmx_packets"] = self.artnet.dmx_packets
        if self.sacn is not None:
            result["sacn.packets"] = self.sacn.packets
            result["sacn.data_packets"] = self.sacn.data_packets
        return result


class NetworkStatus(BaseModel):
    """Network state reported by ``/api/network/status``."""
    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    mode: str | None = None
    ip: str | None = Field(default=None, validation_alias=AliasChoices("ip", "ip_address"))
    connected: bool | None = None
    available: bool = Field(default=True, description="False when the endpoint could not be read")

    @classmethod
    def unavailable(cls, host: str | None = None) -> NetworkStatus:
        """Placeholder used when the endpoint is missing or failing.

        The device host is used as the IP, since the client reached it to
        get this far.
        """
        return cls(mode=None, ip=host, connected=None, available=False)
