"""NiceGUI web dashboard setup and page registration."""

from __future__ import annotations

import os
import secrets

from fastapi import FastAPI
from nicegui import ui

from nodewatch.core.runtime import DashboardRuntime


def setup_ui(fastapi_app: FastAPI, runtime: DashboardRuntime) -> None:
    """Register NiceGUI pages with the FastAPI application."""

    @ui.page("/")
    def index():
        from nodewatch.ui.pages.dashboard import dashboard_page
        dashboard_page(runtime)

    @ui.page("/ports")
    def ports():
        from nodewatch.ui.pages.ports import ports_page
        ports_page(runtime)

    @ui.page("/system")
    def system():
        from nodewatch.ui.pages.system import system_page
        system_page(runtime)

    storage_secret = os.environ.get("NODEWATCH_STORAGE_SECRET") or secrets.token_hex(32)

    ui.run_with(
        fastapi_app,
        title="nodewatch - DMX/RDM Node Monitor",
        storage_secret=storage_secret,
    )
