"""Converged dashboard state written by the poll and live producers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from nodewatch.models.connection import ConnectionState
from nodewatch.models.metrics import RateEstimate
from nodewatch.models.port import PORT_COUNT, PortSnapshot
from nodewatch.models.system import NetworkStatus, ProtocolStats, SystemInfo


class PortView(BaseModel):
    """What the dashboard shows for one port."""
    model_config = {"frozen": True}

    snapshot: PortSnapshot | None = None
    rate: RateEstimate | None = None


def _empty_ports() -> list[PortView]:
    return [PortView() for _ in range(PORT_COUNT)]


class DashboardState(BaseModel):
    """Point-in-time view of the device, replaced wholesale on every write.

    When the system-info fetch fails, ``system_info`` keeps the last good
    reading while ``device_connected`` goes False, so uptime and free heap
    show their values from the last successful tick.
    """
    model_config = {"frozen": True}

    device_connected: bool | None = Field(default=None, description="None until the first poll tick")
    channel_state: ConnectionState = ConnectionState.DISCONNECTED
    system_info: SystemInfo | None = None
    protocol_stats: ProtocolStats | None = None
    protocol_rates: dict[str, RateEstimate] = Field(default_factory=dict)
    network_status: NetworkStatus | None = None
    ports: list[PortView] = Field(default_factory=_empty_ports)
    last_poll_ms: int | None = None
    poll_count: int = 0
    last_event_topic: str | None = None
    last_event_at: float | None = None


class PollResult(BaseModel):
    """Everything one poll tick fetched and derived.

    ``ports`` is ``None`` either because the fetch failed
    (``ports_failed``) or because the response held nothing usable, in
    which case the previous port view is kept.
    """
    model_config = {"frozen": True}

    timestamp_ms: int
    device_connected: bool
    system_info: SystemInfo | None = None
    network_status: NetworkStatus | None = None
    protocol_stats: ProtocolStats | None = None
    protocol_rates: dict[str, RateEstimate] = Field(default_factory=dict)
    ports: list[PortSnapshot] | None = None
    port_rates: list[RateEstimate] | None = None
    ports_failed: bool = False
    failed_resources: list[str] = Field(default_factory=list)
