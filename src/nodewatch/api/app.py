"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from nodewatch import __version__
from nodewatch.config import ClientSettings
from nodewatch.core.runtime import DashboardRuntime
from nodewatch.utils.logging import get_logger, is_configured, setup_logging

logger = get_logger(__name__)


def get_runtime(request: Request) -> DashboardRuntime:
    """FastAPI dependency returning the runtime owned by the app."""
    return request.app.state.runtime


def create_app(
    settings: ClientSettings | None = None,
    enable_ui: bool = True,
    runtime: DashboardRuntime | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Client settings; read from the environment when omitted.
        enable_ui: Whether to mount the NiceGUI web dashboard.
        runtime: Pre-built runtime, mainly for tests. Built from
            *settings* when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or (runtime.settings if runtime else ClientSettings.from_env())
    runtime = runtime or DashboardRuntime(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not is_configured():
            setup_logging()
        logger.info("nodewatch_api_starting", device_url=settings.device_url)
        await runtime.start()
        yield
        await runtime.stop()
        logger.info("nodewatch_api_stopped")

    app = FastAPI(
        title="nodewatch API",
        description="Live state of a DMX/RDM network node",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.runtime = runtime

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from nodewatch.api.routes import state
    app.include_router(state.router, prefix="/api")

    if enable_ui:
        try:
            from nodewatch.ui.main import setup_ui
            setup_ui(app, runtime)
        except ImportError:
            logger.warning("nicegui_not_available", msg="Web dashboard disabled")

    return app
