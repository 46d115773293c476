"""Проверки механизма наблюдателей за настройками."""

from __future__ import annotations

import logging

import pytest

from nasboard.settings.observers import LoggingSettingsObserver, LogLevelObserver, SettingsObserver
from nasboard.settings.registry import SettingsRegistry


class DummyObserver:
    def __init__(self) -> None:
        self.triggered = False
        self.payload = None

    def on_setting_changed(
        self, group: str, key: str, old_value: object, new_value: object
    ) -> None:
        self.triggered = True
        self.payload = (group, key, old_value, new_value)


class FailingObserver:
    def __init__(self) -> None:
        self.counter = 0

    def on_setting_changed(
        self, group: str, key: str, old_value: object, new_value: object
    ) -> None:
        self.counter += 1
        raise RuntimeError("observer failed")


def test_observer_protocol() -> None:
    assert isinstance(DummyObserver(), SettingsObserver)


def test_observer_receives_event(settings: SettingsRegistry) -> None:
    observer = DummyObserver()
    settings.register_observer(observer)
    settings.set_value("server", "port", 8080)
    assert observer.triggered
    assert observer.payload == ("server", "port", 3000, 8080)


def test_unregister_observer(settings: SettingsRegistry) -> None:
    observer = DummyObserver()
    settings.register_observer(observer)
    settings.unregister_observer(observer)
    settings.set_value("server", "port", 8080)
    assert observer.triggered is False


def test_failing_observer_does_not_block_others(settings: SettingsRegistry) -> None:
    failing = FailingObserver()
    observer = DummyObserver()
    settings.register_observer(failing)
    settings.register_observer(observer)
    settings.set_value("server", "port", 8080)
    assert observer.triggered is True
    assert failing.counter == 1


def test_logging_observer_writes_change(
    settings: SettingsRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level("INFO")
    settings.register_observer(LoggingSettingsObserver())
    settings.set_value("server", "port", 8080)
    assert any("Setting changed" in record.message for record in caplog.records)


def test_log_level_observer_applies_level(settings: SettingsRegistry) -> None:
    root = logging.getLogger()
    previous = root.level
    settings.register_observer(LogLevelObserver())
    try:
        settings.set_value("logging", "level", "DEBUG")
        assert root.level == logging.DEBUG
        settings.set_value("server", "port", 8080)
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
