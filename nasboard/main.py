"""Точка входа в NAS Board."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import uvicorn

from nasboard import __version__
from nasboard.app import create_application
from nasboard.bookmarks.manager import BookmarkManager
from nasboard.docker_api.data_provider import DockerDataProvider
from nasboard.settings.observers import LoggingSettingsObserver, LogLevelObserver
from nasboard.settings.registry import SettingsRegistry
from nasboard.utils.logger import configure_logging, configure_logging_from_settings
from nasboard.utils.paths import resolve_base_dir

LOGGER = logging.getLogger(__name__)


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Создаёт реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    registry.register_observer(LoggingSettingsObserver())
    registry.register_observer(LogLevelObserver())
    return registry


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт рабочую структуру (~/.nasboard, logs)."""

    try:
        base_dir.mkdir(parents=True, exist_ok=True)
        (base_dir / "logs").mkdir(exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Cannot initialize working directory %s: %s", base_dir, exc)
        return False


def main() -> int:
    """Готовит окружение и запускает HTTP-сервер."""

    base_dir = resolve_base_dir()
    if not initialize_workdir(base_dir):
        return 1
    configure_logging(base_dir / "logs")

    settings = initialize_settings(base_dir / "config.json")
    configure_logging_from_settings(base_dir, settings)

    docker_provider = DockerDataProvider.from_settings(settings)
    bookmark_manager = BookmarkManager(
        base_dir / "bookmarks.json",
        default_category=settings.get_value("bookmarks", "default_category"),
    )
    app = create_application(settings, docker_provider, bookmark_manager)

    LOGGER.info("Starting NAS Board %s", __version__)
    uvicorn.run(
        app,
        host=settings.get_value("server", "host"),
        port=settings.get_value("server", "port"),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
