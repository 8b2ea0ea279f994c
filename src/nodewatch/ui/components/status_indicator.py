"""Status indicator components."""

from __future__ import annotations

from nicegui import ui

from nodewatch.models.connection import ConnectionState
from nodewatch.ui.theme import COLORS


def _badge(text: str, color: str) -> ui.label:
    label = ui.label(text).classes("px-2 py-1 rounded text-xs font-bold")
    label.style(f"background: {color}20; color: {color}; border: 1px solid {color}40")
    return label


def connectivity_indicator(device_connected: bool | None) -> None:
    """Dot and text for device reachability (primary poll health)."""
    if device_connected is None:
        icon, color, text = "hourglass_empty", COLORS.text_muted, "Connecting..."
    elif device_connected:
        icon, color, text = "link", COLORS.green, "Connected"
    else:
        icon, color, text = "link_off", COLORS.red, "Offline"
    with ui.row().classes("items-center q-gutter-xs"):
        ui.icon(icon).style(f"color: {color}; font-size: 1rem;")
        ui.label(text).classes("text-caption").style(f"color: {color};")


_CHANNEL_BADGES: dict[ConnectionState, tuple[str, str]] = {
    ConnectionState.CONNECTED: ("LIVE", COLORS.green),
    ConnectionState.CONNECTING: ("CONNECTING", COLORS.yellow),
    ConnectionState.DISCONNECTED: ("POLLING", COLORS.text_secondary),
}


def channel_badge(state: ConnectionState) -> ui.label:
    """Badge for the push channel; polling continues while it is down."""
    text, color = _CHANNEL_BADGES[state]
    return _badge(text, color)


def port_active_badge(active: bool | None) -> ui.label:
    if active is None:
        return _badge("--", COLORS.text_muted)
    return _badge("ACTIVE" if active else "IDLE", COLORS.green if active else COLORS.text_muted)
