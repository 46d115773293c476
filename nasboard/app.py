"""Фабрика FastAPI приложения панели."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nasboard import __version__
from nasboard.api.rate_limit import FixedWindowRateLimiter, RateLimitMiddleware
from nasboard.api.routers import bookmarks_router, docker_router, health_router, system_router
from nasboard.bookmarks.manager import BookmarkManager
from nasboard.docker_api.data_provider import DockerDataProvider
from nasboard.settings.registry import SettingsRegistry
from nasboard.utils.cache import TTLCache

LOGGER = logging.getLogger(__name__)


def create_application(
    settings: SettingsRegistry,
    docker_provider: DockerDataProvider,
    bookmark_manager: BookmarkManager,
    *,
    cache: Optional[TTLCache] = None,
) -> FastAPI:
    """Собирает приложение и раскладывает зависимости по `app.state`."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        LOGGER.info("NAS Board %s started", __version__)
        yield
        docker_provider.close()
        LOGGER.info("NAS Board stopped")

    app = FastAPI(title="NAS Board", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.docker_provider = docker_provider
    app.state.bookmark_manager = bookmark_manager
    app.state.cache = cache or TTLCache()

    cors_origins = settings.get_value("server", "cors_origins")
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    if settings.get_value("rate_limit", "enabled"):
        limiter = FixedWindowRateLimiter(
            max_requests=settings.get_value("rate_limit", "max_requests"),
            window_sec=settings.get_value("rate_limit", "window_sec"),
        )
        app.add_middleware(RateLimitMiddleware, limiter=limiter)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(health_router)
    app.include_router(docker_router)
    app.include_router(system_router)
    app.include_router(bookmarks_router)
    return app
