"""Dashboard page - live overview of system, network, protocols and ports."""

from __future__ import annotations

import time

from nicegui import ui

from nodewatch.core.runtime import DashboardRuntime
from nodewatch.models.dashboard import DashboardState
from nodewatch.models.system import NetworkStatus, ProtocolStats, SystemInfo
from nodewatch.ui.components.channel_bars import channel_bars
from nodewatch.ui.components.common import card_title, kv_pair, section_card
from nodewatch.ui.components.port_card import port_card
from nodewatch.ui.formatting import (
    NOT_AVAILABLE,
    PLACEHOLDER,
    UNKNOWN,
    format_bytes,
    format_rate,
    format_uptime,
    text_or,
)
from nodewatch.ui.layout import RENDER_INTERVAL_S, page_layout
from nodewatch.ui.theme import COLORS


def dashboard_page(runtime: DashboardRuntime) -> None:
    """Render the live dashboard page."""

    def content():
        ui.label("Dashboard").classes("text-h5").style(f"color: {COLORS.text_primary}")

        @ui.refreshable
        def status_cards() -> None:
            state = runtime.store.snapshot()
            with ui.row().classes("w-full gap-4"):
                _render_system(state.system_info)
                _render_network(state.network_status)
                _render_protocols(state)
            with ui.row().classes("w-full gap-4"):
                for number, view in enumerate(state.ports, start=1):
                    port_card(number, view)

        @ui.refreshable
        def channels() -> None:
            now = time.time()
            with ui.row().classes("w-full gap-4"):
                for number in (1, 2):
                    with section_card():
                        card_title(f"Port {number} Channels")
                        channel_bars(number, runtime.channel_frame(number, now))

        status_cards()
        channels()

        def _redraw() -> None:
            status_cards.refresh()
            channels.refresh()

        ui.timer(RENDER_INTERVAL_S, _redraw)

    page_layout("Dashboard", content, runtime, current_path="/")


def _render_system(info: SystemInfo | None) -> None:
    with section_card():
        card_title("System")
        with ui.column().classes("gap-1"):
            if info is None:
                ui.label("System info unavailable").style(
                    f"color: {COLORS.text_muted}; font-size: 0.85rem;"
                )
                return
            kv_pair("Firmware", text_or(info.firmware_version))
            kv_pair("Hardware", text_or(info.hardware))
            kv_pair("IDF", text_or(info.idf_version))
            kv_pair("Free Heap", format_bytes(info.free_heap))
            kv_pair("Uptime", format_uptime(info.uptime_sec))


def _render_network(status: NetworkStatus | None) -> None:
    with section_card():
        card_title("Network")
        with ui.column().classes("gap-1"):
            if status is None:
                kv_pair("Mode", PLACEHOLDER, COLORS.text_muted)
                return
            if not status.available:
                kv_pair("Mode", NOT_AVAILABLE, COLORS.text_muted)
                kv_pair("IP", text_or(status.ip))
                return
            kv_pair("Mode", text_or(status.mode, UNKNOWN))
            kv_pair("IP", text_or(status.ip, "Not connected"))
            if status.connected is None:
                kv_pair("Status", UNKNOWN, COLORS.text_muted)
            elif status.connected:
                kv_pair("Status", "Connected", COLORS.green)
            else:
                kv_pair("Status", "Disconnected", COLORS.red)


def _render_protocols(state: DashboardState) -> None:
    stats: ProtocolStats | None = state.protocol_stats
    rates = state.protocol_rates
    with section_card():
        card_title("Protocols")
        with ui.column().classes("gap-1"):
            if stats is None:
                ui.label("Protocol counters unavailable").style(
                    f"color: {COLORS.text_muted}; font-size: 0.85rem;"
                )
                return
            if stats.artnet is not None:
                kv_pair("Art-Net packets", str(stats.artnet.packets))
                kv_pair("Art-Net DMX", str(stats.artnet.dmx_packets))
                kv_pair("Art-Net rate", format_rate(rates.get("artnet.dmx_packets")), COLORS.cyan)
            else:
                kv_pair("Art-Net", PLACEHOLDER, COLORS.text_muted)
            if stats.sacn is not None:
                kv_pair("sACN packets", str(stats.sacn.packets))
                kv_pair("sACN data", str(stats.sacn.data_packets))
                kv_pair("sACN rate", format_rate(rates.get("sacn.data_packets")), COLORS.cyan)
            else:
                kv_pair("sACN", PLACEHOLDER, COLORS.text_muted)
