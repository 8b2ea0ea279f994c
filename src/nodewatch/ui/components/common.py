"""Shared UI helpers."""

from __future__ import annotations

from nicegui import ui

from nodewatch.ui.theme import COLORS


def kv_pair(label: str, value: str, value_color: str | None = None) -> None:
    """Render a compact key-value pair."""
    with ui.row().classes("items-center gap-2"):
        ui.label(f"{label}:").style(
            f"color: {COLORS.text_secondary}; font-size: 0.85rem;"
        )
        ui.label(value).style(
            f"color: {value_color or COLORS.text_primary}; font-weight: 600;"
            f" font-size: 0.85rem;"
        )


def card_title(text: str) -> None:
    ui.label(text).classes("text-subtitle2 mb-2").style(f"color: {COLORS.cyan}")


def section_card(classes: str = "flex-1 p-4") -> ui.card:
    return ui.card().classes(classes).style(
        f"background: {COLORS.bg_secondary}; border: 1px solid {COLORS.border}"
    )
