"""System page - network configuration, RDM discovery, restart and reset."""

from __future__ import annotations

import asyncio

from nicegui import ui

from nodewatch.core.runtime import DashboardRuntime
from nodewatch.exceptions import NodewatchError
from nodewatch.models.device_config import NetworkConfig, network_update
from nodewatch.models.notification import Severity
from nodewatch.ui.components.common import card_title, section_card
from nodewatch.ui.formatting import text_or
from nodewatch.ui.layout import page_layout
from nodewatch.ui.theme import COLORS

_RESTART_COUNTDOWN_S = 10


def system_page(runtime: DashboardRuntime) -> None:
    """Render the system administration page."""

    def content():
        ui.label("System").classes("text-h5").style(f"color: {COLORS.text_primary}")
        with ui.row().classes("w-full gap-4"):
            _network_form(runtime)
            _maintenance_card(runtime)
        _rdm_card(runtime)

    page_layout("System", content, runtime, current_path="/system")


def _network_form(runtime: DashboardRuntime) -> None:
    client = runtime.client
    notifications = runtime.notifications

    with section_card():
        card_title("Network")
        mode = ui.select({"sta": "Station", "ap": "Access Point", "eth": "Ethernet"},
                         value="sta", label="Mode").classes("w-full")
        ssid = ui.input("WiFi SSID").classes("w-full")
        password = ui.input("WiFi Password", password=True,
                            password_toggle_button=True).classes("w-full")
        dhcp = ui.checkbox("Use DHCP", value=True)
        with ui.column().classes("w-full gap-1") as static_fields:
            static_ip = ui.input("Static IP").classes("w-full")
            gateway = ui.input("Gateway").classes("w-full")
            netmask = ui.input("Netmask").classes("w-full")
        static_fields.bind_visibility_from(dhcp, "value", backward=lambda v: not v)

        async def load():
            try:
                config = await client.get_config()
            except NodewatchError:
                notifications.notify("Failed to load network configuration", Severity.ERROR)
                return
            net = config.network
            mode.value = net.mode or "sta"
            ssid.value = net.wifi_ssid
            password.value = ""
            dhcp.value = net.use_dhcp
            static_ip.value = net.static_ip
            gateway.value = net.gateway
            netmask.value = net.netmask
            notifications.notify("Network configuration loaded", Severity.INFO)

        async def save():
            config = NetworkConfig(
                mode=mode.value,
                wifi_ssid=ssid.value or "",
                wifi_password=password.value or None,
                use_dhcp=bool(dhcp.value),
                static_ip=static_ip.value or "",
                gateway=gateway.value or "",
                netmask=netmask.value or "",
            )
            try:
                await client.update_config(network_update(config))
                notifications.notify("Network configuration saved successfully", Severity.SUCCESS)
            except NodewatchError:
                notifications.notify("Failed to save network configuration", Severity.ERROR)

        with ui.row().classes("gap-2"):
            ui.button("Load", on_click=load).props("flat")
            ui.button("Save", on_click=save).props("flat color=primary")

        ui.timer(0.1, load, once=True)


async def _confirm(question: str) -> bool:
    with ui.dialog() as dialog, ui.card():
        ui.label(question)
        with ui.row().classes("justify-end w-full"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("Confirm", on_click=lambda: dialog.submit(True)).props("flat color=negative")
    return bool(await dialog)


def _maintenance_card(runtime: DashboardRuntime) -> None:
    client = runtime.client
    notifications = runtime.notifications

    async def restart():
        if not await _confirm("Are you sure you want to reboot the device?"):
            return
        try:
            await client.restart()
        except NodewatchError:
            notifications.notify("Failed to reboot device", Severity.ERROR)
            return
        notifications.notify("Device is rebooting...", Severity.INFO)
        for remaining in range(_RESTART_COUNTDOWN_S - 1, 0, -1):
            await asyncio.sleep(1)
            notifications.notify(f"Reconnecting in {remaining} seconds...", Severity.INFO)
        await asyncio.sleep(1)
        ui.navigate.reload()

    async def factory_reset():
        if not await _confirm("Are you sure you want to factory reset? All settings will be lost!"):
            return
        if not await _confirm("This action cannot be undone. Continue?"):
            return
        try:
            await client.factory_reset()
            notifications.notify("Factory reset initiated", Severity.WARNING)
        except NodewatchError:
            notifications.notify("Factory reset not available on this device", Severity.WARNING)

    with section_card():
        card_title("Maintenance")
        state = runtime.store.snapshot()
        firmware = state.system_info.firmware_version if state.system_info else None
        ui.label(f"Firmware: {text_or(firmware)}").style(f"color: {COLORS.text_secondary}")
        with ui.row().classes("gap-2 mt-2"):
            ui.button("Reboot", icon="restart_alt", on_click=restart).props("flat color=warning")
            ui.button("Factory Reset", icon="delete_forever", on_click=factory_reset).props(
                "flat color=negative"
            )


def _rdm_card(runtime: DashboardRuntime) -> None:
    client = runtime.client
    notifications = runtime.notifications

    columns = [
        {"name": "port", "label": "Port", "field": "port"},
        {"name": "uid", "label": "UID", "field": "uid"},
        {"name": "label", "label": "Label", "field": "label"},
        {"name": "dmx_address", "label": "DMX Address", "field": "dmx_address"},
        {"name": "manufacturer", "label": "Manufacturer", "field": "manufacturer"},
        {"name": "model", "label": "Model", "field": "model"},
    ]

    with section_card("w-full p-4"):
        card_title("RDM Devices")
        status = ui.label("Not scanned").style(f"color: {COLORS.text_muted}")
        table = ui.table(columns=columns, rows=[], row_key="uid").classes("w-full")

        async def discover():
            status.text = "Scanning for RDM devices..."
            status.style(f"color: {COLORS.blue}")
            try:
                devices = await client.discover_rdm()
            except NodewatchError:
                status.text = "RDM discovery failed or not available"
                status.style(f"color: {COLORS.red}")
                notifications.notify("RDM discovery is not available", Severity.WARNING)
                return
            table.rows = [d.model_dump() for d in devices]
            table.update()
            if devices:
                status.text = f"Found {len(devices)} device(s)"
                status.style(f"color: {COLORS.green}")
            else:
                status.text = "No RDM devices found"
                status.style(f"color: {COLORS.text_muted}")

        ui.button("Discover", icon="search", on_click=discover).props("flat color=primary")
