"""Dark theme configuration for the web dashboard."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    bg_primary: str = "#0d1117"
    bg_secondary: str = "#161b22"
    bg_tertiary: str = "#21262d"
    border: str = "#30363d"
    text_primary: str = "#e6edf3"
    text_secondary: str = "#8b949e"
    text_muted: str = "#484f58"
    cyan: str = "#39c5cf"
    blue: str = "#58a6ff"
    green: str = "#3fb950"
    red: str = "#f85149"
    yellow: str = "#d29922"
    purple: str = "#bc8cff"
    orange: str = "#d18616"


COLORS = Palette()

SEVERITY_COLORS: dict[str, str] = {
    "info": COLORS.blue,
    "success": COLORS.green,
    "warning": COLORS.yellow,
    "error": COLORS.red,
}

STRENGTH_COLORS: dict[str, str] = {
    "weak": COLORS.red,
    "medium": COLORS.yellow,
    "strong": COLORS.green,
}

GLOBAL_CSS = """
body {
    background-color: #0d1117 !important;
    color: #e6edf3 !important;
    font-family: 'JetBrains Mono', 'Fira Code', monospace !important;
}
.q-card {
    background-color: #161b22 !important;
    border: 1px solid #30363d !important;
}
.q-drawer {
    background-color: #161b22 !important;
    border-right: 1px solid #30363d !important;
}
.q-header {
    background-color: #161b22 !important;
    border-bottom: 1px solid #30363d !important;
}
.q-btn {
    text-transform: none !important;
}
.section-title {
    color: #8b949e;
    font-size: 0.75rem;
    letter-spacing: 0.1em;
}
.toast-stack {
    position: fixed;
    right: 16px;
    bottom: 16px;
    z-index: 9999;
    width: 320px;
}
.toast {
    transition: opacity 0.3s ease;
}
.toast.fading {
    opacity: 0;
}
.channel-bar {
    transition: height 0.2s ease;
}
"""
