"""
Shared page layout with header, sidebar, toast stack and content area.

Every page uses page_layout() to get consistent nav and structure. The
header status and the toasts redraw on a timer that only reads the
runtime's store and notification center.
"""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from nodewatch.core.runtime import DashboardRuntime
from nodewatch.ui.components.sidebar import sidebar_nav
from nodewatch.ui.components.status_indicator import channel_badge, connectivity_indicator
from nodewatch.ui.components.toasts import toast_stack
from nodewatch.ui.theme import COLORS, GLOBAL_CSS

RENDER_INTERVAL_S = 0.5


def page_layout(
    title: str,
    content_fn: Callable[[], None],
    runtime: DashboardRuntime,
    current_path: str,
) -> None:
    """Create the standard page layout with header and sidebar.

    Args:
        title: Page title displayed in the header.
        content_fn: Callable that builds the page content.
        runtime: Component runtime the page renders from.
        current_path: Path of the page, for sidebar highlighting.
    """
    ui.add_css(GLOBAL_CSS)
    ui.dark_mode(True)
    ui.colors(primary=COLORS.cyan, secondary=COLORS.blue, accent=COLORS.purple)

    with ui.header(elevated=True).classes("q-pa-sm"):
        with ui.row().classes("w-full items-center no-wrap q-gutter-md"):
            ui.label("NODEWATCH").classes("text-h6 text-bold").style(
                f"color: {COLORS.cyan}; letter-spacing: 0.15em;"
            )
            ui.label("|").style(f"color: {COLORS.text_muted};")
            ui.label("DMX/RDM Node Monitor").classes("text-subtitle2").style(
                f"color: {COLORS.text_secondary};"
            )

            ui.space()

            ui.label(title).classes("text-subtitle1").style(
                f"color: {COLORS.text_primary};"
            )

            ui.space()

            @ui.refreshable
            def header_status() -> None:
                state = runtime.store.snapshot()
                with ui.row().classes("items-center q-gutter-sm"):
                    channel_badge(state.channel_state)
                    connectivity_indicator(state.device_connected)

            header_status()

    with ui.left_drawer(value=True, bordered=True).classes("q-pa-none").style(
        f"width: 240px; background-color: {COLORS.bg_secondary};"
    ):
        sidebar_nav(runtime.settings.device_url, current_path=current_path)

    with ui.column().classes("q-pa-md w-full").style(
        f"background-color: {COLORS.bg_primary};"
    ):
        content_fn()

    toasts = toast_stack(runtime.notifications)

    def _redraw() -> None:
        header_status.refresh()
        toasts.refresh()

    ui.timer(RENDER_INTERVAL_S, _redraw)
