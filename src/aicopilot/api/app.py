"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from aicopilot.api.middleware.error_handler import register_error_handlers
from aicopilot.api.routes import completion, health
from aicopilot.core.config import APIConfig, AppSettings
from aicopilot.core.logging_config import setup_logging
from aicopilot.core.startup_checks import validate_settings
from aicopilot.services.copilot import CopilotService


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("aicopilot")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(service: Optional[CopilotService] = None) -> FastAPI:
    """Build the API; ``service`` is created from env settings at startup when omitted."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        copilot = service
        if copilot is None:
            settings = AppSettings()
            validate_settings(settings)
            setup_logging(settings.observability)
            copilot = CopilotService(settings)
        app.state.copilot = copilot
        try:
            yield
        finally:
            await copilot.aclose()

    api_config = APIConfig()
    application = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(application)
    application.include_router(health.router)
    application.include_router(completion.router, prefix="/api")
    return application


app = create_app()
