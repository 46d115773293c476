"""Роутеры API."""

from nasboard.api.routers.bookmarks import router as bookmarks_router
from nasboard.api.routers.docker import router as docker_router
from nasboard.api.routers.health import router as health_router
from nasboard.api.routers.system import router as system_router

__all__ = ["bookmarks_router", "docker_router", "health_router", "system_router"]
