"""Наблюдатели за изменением настроек."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from nasboard.utils.logger import resolve_log_level


@runtime_checkable
class SettingsObserver(Protocol):
    """Базовый контракт наблюдателя."""

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        """Обрабатывает событие изменения конкретного ключа."""


class LoggingSettingsObserver:
    """Пишет каждое изменение в журнал."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        self._logger.info(
            "Setting changed: %s.%s (%r -> %r)",
            group,
            key,
            old_value,
            new_value,
        )


class LogLevelObserver:
    """Применяет новое значение logging.level к корневому логгеру без перезапуска."""

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        if group != "logging" or key != "level":
            return
        logging.getLogger().setLevel(resolve_log_level(str(new_value)))
