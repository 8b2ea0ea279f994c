"""Port snapshot models and mode enumerations."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field, field_validator

from nodewatch.models._fields import Counter

PORT_COUNT = 2


class PortMode(IntEnum):
    """DMX port operating mode."""
    DISABLED = 0
    DMX_OUTPUT = 1
    DMX_INPUT = 2
    RDM_MASTER = 3
    RDM_RESPONDER = 4

    @property
    def display_name(self) -> str:
        return PORT_MODE_NAMES[self]


PORT_MODE_NAMES: dict[PortMode, str] = {
    PortMode.DISABLED: "Disabled",
    PortMode.DMX_OUTPUT: "DMX Output",
    PortMode.DMX_INPUT: "DMX Input",
    PortMode.RDM_MASTER: "RDM Master",
    PortMode.RDM_RESPONDER: "RDM Responder",
}


class MergeMode(IntEnum):
    """How a port combines multiple sources for one universe."""
    HTP = 0
    LTP = 1
    LAST = 2
    BACKUP = 3
    DISABLE = 4


MERGE_MODE_NAMES: dict[MergeMode, str] = {
    MergeMode.HTP: "HTP (Highest Takes Precedence)",
    MergeMode.LTP: "LTP (Latest Takes Precedence)",
    MergeMode.LAST: "Last Source",
    MergeMode.BACKUP: "Backup",
    MergeMode.DISABLE: "Disabled",
}


def coerce_port_mode(value: object) -> PortMode | None:
    """Map a raw mode value to :class:`PortMode`, or ``None`` when unknown."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return PortMode(int(value))
    except (TypeError, ValueError):
        return None


class PortSnapshot(BaseModel):
    """Read-only mirror of one port as reported by ``/api/ports/status``."""
    model_config = {"frozen": True, "extra": "ignore"}

    port: int | None = None
    mode: PortMode | None = None
    universe: int | None = Field(default=None, description="Primary universe; None renders a placeholder")
    frames_sent: Counter = 0
    frames_received: Counter = 0
    active: bool | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _lenient_mode(cls, value: object) -> PortMode | None:
        return coerce_port_mode(value)

    @property
    def mode_name(self) -> str:
        return self.mode.display_name if self.mode is not None else "Unknown"


class RdmDevice(BaseModel):
    """An RDM responder found by discovery."""
    model_config = {"frozen": True, "extra": "ignore"}

    port: int | None = None
    uid: str = ""
    label: str = ""
    dmx_address: int | None = None
    manufacturer: str = ""
    model: str = ""
