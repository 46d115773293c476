"""Тесты вспомогательных функций модуля main."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from nasboard.main import initialize_settings, initialize_workdir
from nasboard.settings.observers import LoggingSettingsObserver, LogLevelObserver
from nasboard.utils.logger import configure_logging_from_settings


def test_initialize_workdir_creates_structure(tmp_path: Path) -> None:
    base_dir = tmp_path / ".nasboard"
    assert initialize_workdir(base_dir)
    assert (base_dir / "logs").is_dir()


def test_initialize_workdir_fails_on_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert initialize_workdir(blocker) is False


def test_initialize_settings_writes_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    registry = initialize_settings(config_path)
    assert json.loads(config_path.read_text(encoding="utf-8"))["server"]["port"] == 3000
    observers = registry._observers  # type: ignore[attr-defined]
    assert any(isinstance(item, LoggingSettingsObserver) for item in observers)
    assert any(isinstance(item, LogLevelObserver) for item in observers)


def test_setup_logging_enabled_creates_log(tmp_path: Path, settings) -> None:
    logging.disable(logging.NOTSET)
    configure_logging_from_settings(tmp_path, settings)
    logger = logging.getLogger("test")
    logger.info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()
    log_file = tmp_path / "logs" / "app.log"
    assert log_file.exists()
    assert "log entry" in log_file.read_text(encoding="utf-8")


def test_setup_logging_disabled(tmp_path: Path, settings) -> None:
    settings.set_value("logging", "enabled", False)
    configure_logging_from_settings(tmp_path, settings)
    assert logging.root.manager.disable >= logging.CRITICAL
    logging.disable(logging.NOTSET)
