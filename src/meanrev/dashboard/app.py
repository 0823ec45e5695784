"""FastAPI dashboard application factory."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from meanrev import __version__
from meanrev.config import AppSettings
from meanrev.dashboard.routes import api
from meanrev.market_data.scanner import SignalScanner
from meanrev.position.sizing import PositionSizer


def create_dashboard_app(
    settings: AppSettings | None = None,
    scanner: SignalScanner | None = None,
    lifespan: Any = None,
) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        settings: Application settings. Defaults to environment-loaded settings.
        scanner: Signal scanner serving the signal endpoints. May be None and
                 wired later by the lifespan (main.py) via app.state.scanner.
        lifespan: Optional async context manager for application lifespan events.

    Returns:
        Configured FastAPI application with JSON API routes.
    """
    settings = settings or AppSettings()

    app = FastAPI(
        title="Funding Rate Mean Reversion Dashboard",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.scanner = scanner
    app.state.position_sizer = PositionSizer(settings.sizing)

    app.include_router(api.router, prefix="/api")

    return app
