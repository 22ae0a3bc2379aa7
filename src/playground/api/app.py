"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from playground import __version__
from playground.api.errors import register_error_handlers
from playground.api.routes import router
from playground.config import Settings
from playground.runtime.sandbox.docker_launcher import DockerLauncher
from playground.runtime.service import PlaygroundService

logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> PlaygroundService:
    """Channel table + docker launcher, validated from *settings*."""
    channels = settings.load_channels()
    launcher = DockerLauncher(settings.sandbox_policy(), docker_binary=settings.docker_binary)
    return PlaygroundService(channels, launcher)


def create_app(settings: Settings, service: PlaygroundService | None = None) -> FastAPI:
    """Build the application.

    Configuration is validated here, before the server accepts requests;
    an invalid channel table raises :class:`~playground.runtime.errors.ConfigError`.
    """
    service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting noir-playground v%s with channels: %s",
            __version__,
            ", ".join(service.channels.names()),
        )
        yield
        logger.info("Shutting down")

    app = FastAPI(title="noir-playground", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service

    register_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    # Mounted last: it would otherwise shadow the API routes.
    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.info("No static directory at %s; serving the API only", settings.static_dir)

    return app
