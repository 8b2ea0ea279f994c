"""Per-port status card."""

from __future__ import annotations

from nicegui import ui

from nodewatch.models.dashboard import PortView
from nodewatch.ui.components.common import card_title, kv_pair, section_card
from nodewatch.ui.components.status_indicator import port_active_badge
from nodewatch.ui.formatting import PLACEHOLDER, format_rate, mode_name, text_or
from nodewatch.ui.theme import COLORS


def port_card(port_number: int, view: PortView) -> None:
    """Render mode, universe, frame count and refresh rate for one port."""
    snapshot = view.snapshot
    with section_card():
        with ui.row().classes("w-full items-center justify-between"):
            card_title(f"Port {port_number}")
            port_active_badge(snapshot.active if snapshot else None)
        with ui.column().classes("gap-1"):
            if snapshot is None:
                kv_pair("Mode", PLACEHOLDER, COLORS.text_muted)
                kv_pair("Universe", PLACEHOLDER, COLORS.text_muted)
                kv_pair("Frames", PLACEHOLDER, COLORS.text_muted)
            else:
                kv_pair("Mode", mode_name(snapshot.mode))
                kv_pair("Universe", text_or(snapshot.universe))
                kv_pair("Frames", str(snapshot.frames_sent))
            kv_pair("Refresh", format_rate(view.rate), COLORS.cyan)
