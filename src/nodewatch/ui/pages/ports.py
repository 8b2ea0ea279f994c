"""Ports page - per-port configuration, merge mode and blackout."""

from __future__ import annotations

from nicegui import ui

from nodewatch.core.runtime import DashboardRuntime
from nodewatch.exceptions import NodewatchError
from nodewatch.models.device_config import DeviceConfig, port_update
from nodewatch.models.notification import Severity
from nodewatch.models.port import MERGE_MODE_NAMES, PORT_COUNT, PORT_MODE_NAMES
from nodewatch.ui.components.common import card_title, section_card
from nodewatch.ui.layout import page_layout
from nodewatch.ui.theme import COLORS

_MODE_OPTIONS = {int(mode): name for mode, name in PORT_MODE_NAMES.items()}
_MERGE_OPTIONS = {int(mode): name for mode, name in MERGE_MODE_NAMES.items()}


def ports_page(runtime: DashboardRuntime) -> None:
    """Render the port configuration page."""
    client = runtime.client
    notifications = runtime.notifications

    def content():
        ui.label("Port Configuration").classes("text-h5").style(
            f"color: {COLORS.text_primary}"
        )
        forms_row = ui.row().classes("w-full gap-4")

        async def load_config():
            try:
                config = await client.get_config()
            except NodewatchError as exc:
                notifications.notify(f"Failed to load configuration: {exc}", Severity.ERROR)
                config = DeviceConfig()
            forms_row.clear()
            with forms_row:
                for port in range(1, PORT_COUNT + 1):
                    _port_form(runtime, port, config)

        ui.timer(0.1, load_config, once=True)

    page_layout("Ports", content, runtime, current_path="/ports")


def _port_form(runtime: DashboardRuntime, port: int, config: DeviceConfig) -> None:
    client = runtime.client
    notifications = runtime.notifications
    current = config.port(port)

    with section_card():
        card_title(f"Port {port}")
        mode = ui.select(_MODE_OPTIONS, value=int(current.mode), label="Mode").classes("w-full")
        universe = ui.number("Universe", value=current.universe_primary, min=0, max=32767,
                             precision=0).classes("w-full")
        priority = ui.number("Priority", value=current.priority if current.priority is not None else 100,
                             min=0, max=200, precision=0).classes("w-full")

        async def save_port():
            update = port_update(
                port,
                mode=mode.value,
                universe=int(universe.value or 0),
                priority=int(priority.value or 0),
            )
            try:
                await client.update_config(update)
                notifications.notify(f"Port {port} configuration saved", Severity.SUCCESS)
            except NodewatchError:
                notifications.notify(f"Failed to save Port {port} configuration", Severity.ERROR)

        ui.button("Save", on_click=save_port).props("flat color=primary")

        ui.separator().classes("my-2")

        merge = ui.select(_MERGE_OPTIONS, value=int(current.merge_mode), label="Merge mode").classes("w-full")

        async def save_merge(e):
            try:
                await client.update_config(port_update(port, merge_mode=e.value))
                notifications.notify(f"Port {port} merge mode updated", Severity.SUCCESS)
            except NodewatchError:
                notifications.notify("Failed to update merge mode", Severity.ERROR)

        merge.on_value_change(save_merge)

        ui.separator().classes("my-2")

        async def blackout():
            try:
                await client.blackout_port(port)
                notifications.notify(f"Port {port} blackout activated", Severity.WARNING)
            except NodewatchError:
                notifications.notify(f"Failed to blackout Port {port}", Severity.ERROR)

        ui.button("Blackout", icon="highlight_off", on_click=blackout).props(
            "flat color=negative"
        )
