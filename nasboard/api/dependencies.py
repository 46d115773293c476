"""Доступ роутеров к объектам, созданным фабрикой приложения."""

from __future__ import annotations

from fastapi import Request

from nasboard.bookmarks.manager import BookmarkManager
from nasboard.docker_api.data_provider import DockerDataProvider
from nasboard.settings.registry import SettingsRegistry
from nasboard.utils.cache import TTLCache


def get_docker_provider(request: Request) -> DockerDataProvider:
    return request.app.state.docker_provider


def get_bookmark_manager(request: Request) -> BookmarkManager:
    return request.app.state.bookmark_manager


def get_settings(request: Request) -> SettingsRegistry:
    return request.app.state.settings


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache
