"""Navigation sidebar."""

from __future__ import annotations

from nicegui import ui

from nodewatch.ui.theme import COLORS


def sidebar_nav(device_url: str, current_path: str | None = None) -> None:
    """Render the navigation sidebar content.

    Args:
        device_url: Monitored device, shown under the nav links.
        current_path: Current page path for active link highlighting.
    """
    with ui.column().classes("w-full q-pa-sm q-gutter-sm"):
        ui.label("NODE").classes("section-title q-px-sm q-pt-sm")
        _nav_item("Dashboard", "dashboard", "/", active=(current_path == "/"))
        _nav_item("Ports", "settings_input_component", "/ports",
                  active=(current_path == "/ports"))
        _nav_item("System", "settings", "/system",
                  active=(current_path == "/system"))

        ui.separator().style(f"background-color: {COLORS.border};")
        ui.label(device_url).classes("text-caption q-px-sm").style(
            f"color: {COLORS.text_muted}; word-break: break-all;"
        )


def _nav_item(label: str, icon: str, href: str, active: bool = False) -> None:
    color = COLORS.cyan if active else COLORS.text_secondary
    background = COLORS.bg_tertiary if active else "transparent"
    with ui.link(target=href).classes("w-full no-underline"):
        with ui.row().classes("items-center gap-2 q-px-sm q-py-xs w-full").style(
            f"background: {background}; border-radius: 6px;"
        ):
            ui.icon(icon).style(f"color: {color}; font-size: 1.1rem;")
            ui.label(label).style(f"color: {color}; font-size: 0.9rem;")
