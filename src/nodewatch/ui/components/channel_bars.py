"""Channel level bars and signal strength meter."""

from __future__ import annotations

from nicegui import ui

from nodewatch.core.metrics import channel_percentage, is_high_level, signal_strength, strength_band
from nodewatch.ui.theme import COLORS, STRENGTH_COLORS

_BAR_HEIGHT_PX = 120


def channel_bars(port_number: int, levels: list[int]) -> None:
    """Render one vertical bar per channel plus the port's signal strength."""
    with ui.row().classes("items-end gap-2"):
        for channel, level in enumerate(levels, start=1):
            pct = channel_percentage(level)
            color = COLORS.orange if is_high_level(level) else COLORS.cyan
            with ui.column().classes("items-center gap-1"):
                ui.label(str(level)).classes("text-caption").style(
                    f"color: {COLORS.text_secondary}"
                )
                with ui.element("div").style(
                    f"height: {_BAR_HEIGHT_PX}px; width: 18px; display: flex;"
                    f" align-items: flex-end; background: {COLORS.bg_tertiary};"
                    f" border-radius: 3px;"
                ):
                    ui.element("div").classes("channel-bar").style(
                        f"height: {pct}%; width: 100%; background: {color};"
                        f" border-radius: 3px;"
                    )
                ui.label(f"CH{channel}").classes("text-caption").style(
                    f"color: {COLORS.text_muted}"
                )
                ui.label(f"{pct}%").classes("text-caption").style(
                    f"color: {COLORS.text_secondary}"
                )

    strength = signal_strength(levels)
    color = STRENGTH_COLORS[strength_band(strength)]
    with ui.row().classes("w-full items-center gap-2 mt-2"):
        ui.label(f"Port {port_number} signal").classes("text-caption").style(
            f"color: {COLORS.text_secondary}"
        )
        with ui.element("div").classes("flex-1").style(
            f"height: 8px; background: {COLORS.bg_tertiary}; border-radius: 4px;"
        ):
            ui.element("div").style(
                f"height: 100%; width: {strength}%; background: {color}; border-radius: 4px;"
            )
        ui.label(f"{strength}%").classes("text-caption").style(f"color: {color}")
