"""Display formatting for device values.

Missing values render as placeholders rather than errors so a partially
reachable device still produces a usable dashboard.
"""

from __future__ import annotations

from nodewatch.models.metrics import RateEstimate
from nodewatch.models.port import PortMode

PLACEHOLDER = "--"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"

_BYTE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(value: int | None) -> str:
    """Human-readable byte count, e.g. ``1.5 KB``."""
    if not value or value < 0:
        return PLACEHOLDER
    exponent = 0
    while value >= 1024 ** (exponent + 1) and exponent < len(_BYTE_UNITS) - 1:
        exponent += 1
    scaled = round(value / 1024**exponent, 2)
    return f"{scaled:g} {_BYTE_UNITS[exponent]}"


def format_uptime(seconds: int | None) -> str:
    """Compact uptime, showing at most three units."""
    if not seconds or seconds < 0:
        return PLACEHOLDER
    days, rem = divmod(int(seconds), 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_rate(rate: RateEstimate | None) -> str:
    if rate is None:
        return PLACEHOLDER
    return rate.format("Hz")


def mode_name(mode: PortMode | None) -> str:
    return mode.display_name if mode is not None else UNKNOWN


def text_or(value: object, placeholder: str = PLACEHOLDER) -> str:
    """``str(value)``, or *placeholder* when the value is missing or empty."""
    if value is None or value == "":
        return placeholder
    return str(value)
