"""
FastAPI application factory.
create_app() is the single entry point for wiring the verifier into a host app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from config import AppSettings
from errors import register_error_handlers
from routes.health_routes import router as health_router
from shared.logging import setup_logging


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    # Built on first use by dependencies.get_captcha_verifier
    app.state.captcha_verifier = None

    register_error_handlers(app)
    app.include_router(health_router)

    return app
