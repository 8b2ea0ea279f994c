"""Toast stack rendered from the notification center."""

from __future__ import annotations

from nicegui import ui

from nodewatch.core.notifications import NotificationCenter
from nodewatch.ui.theme import COLORS, SEVERITY_COLORS


def toast_stack(center: NotificationCenter) -> ui.refreshable:
    """Create the fixed toast column; call ``.refresh()`` to redraw it."""

    @ui.refreshable
    def _render() -> None:
        with ui.column().classes("toast-stack gap-2"):
            for item in center.notifications:
                color = SEVERITY_COLORS[item.severity.value]
                classes = "toast w-full p-3" + (" fading" if item.fading else "")
                with ui.card().classes(classes).style(
                    f"background: {COLORS.bg_tertiary}; border-left: 4px solid {color}"
                ):
                    with ui.row().classes("w-full items-center justify-between no-wrap"):
                        ui.label(item.title).classes("text-bold").style(f"color: {color}")
                        ui.button(
                            icon="close",
                            on_click=lambda _e, nid=item.id: center.dismiss(nid),
                        ).props("flat dense round size=xs")
                    ui.label(item.message).style(
                        f"color: {COLORS.text_primary}; font-size: 0.85rem;"
                    )

    _render()
    return _render
