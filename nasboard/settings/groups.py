"""Классы групп настроек с полной поддержкой валидации."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from nasboard.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from nasboard.settings.validators import (
    CompositeValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

DOCKER_URL_PATTERN = r"^(unix|npipe|tcp)://.+$"
HOST_PATTERN = r"^[A-Za-z0-9\.\-:]+$"


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    @abstractmethod
    def _initialize_defaults(self) -> None:
        """Задаёт значения по умолчанию для группы."""

    @abstractmethod
    def _setup_validators(self) -> None:
        """Привязывает валидаторы к ключам группы."""

    def keys(self) -> Tuple[str, ...]:
        """Возвращает доступные ключи группы."""

        return tuple(self._defaults.keys())

    def get(self, key: str, default: Any = None) -> Any:
        """Возвращает значение настройки."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values.get(key, default)

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        """Применяет соответствующий валидатор и возвращает результат."""

        validator = self._validators.get(key)
        if not validator:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Возвращает копию всех значений."""

        return dict(self._values)

    def get_default(self, key: str) -> Any:
        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._defaults[key]

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет значениями из словаря (использует set для валидации)."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class ServerSettings(SettingsGroup):
    """Параметры HTTP-сервера."""

    group_name = "server"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "host": "0.0.0.0",
            "port": 3000,
            "cors_origins": [],
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "host": RegexValidator(HOST_PATTERN),
            "port": RangeValidator(1, 65535),
            "cors_origins": TypeValidator(list),
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования приложения."""

    group_name = "logging"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": TypeValidator(bool),
            "level": EnumValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "max_file_size_mb": RangeValidator(1, 1000),
            "max_archived_files": RangeValidator(1, 50),
        }


class DockerSettings(SettingsGroup):
    """Транспорты и таймауты подключения к Docker daemon."""

    group_name = "docker"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "in_container": None,  # None: определить по окружению
            "socket_path": "unix:///var/run/docker.sock",
            "named_pipe_path": "npipe:////./pipe/docker_engine",
            "fallback_host": "127.0.0.1",
            "fallback_port": 2375,
            "primary_timeout_sec": 5,
            "fallback_timeout_sec": 5,
            "stop_timeout_sec": 10,
            "stats_use_fallback": False,
        }

    def _setup_validators(self) -> None:
        address = CompositeValidator([TypeValidator(str), RegexValidator(DOCKER_URL_PATTERN)])
        self._validators = {
            "in_container": TypeValidator((bool, type(None))),
            "socket_path": TypeValidator(str),
            "named_pipe_path": address,
            "fallback_host": RegexValidator(HOST_PATTERN),
            "fallback_port": RangeValidator(1, 65535),
            "primary_timeout_sec": RangeValidator(1, 120),
            "fallback_timeout_sec": RangeValidator(1, 120),
            "stop_timeout_sec": RangeValidator(0, 300),
            "stats_use_fallback": TypeValidator(bool),
        }


class MetricsSettings(SettingsGroup):
    """Параметры сбора системных метрик."""

    group_name = "metrics"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "system_cache_ttl_sec": 5,
            "disk_path": "/",
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "system_cache_ttl_sec": RangeValidator(0, 3600),
            "disk_path": TypeValidator(str),
        }


class RateLimitSettings(SettingsGroup):
    """Ограничение частоты запросов к API по IP."""

    group_name = "rate_limit"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "max_requests": 100,
            "window_sec": 60,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": TypeValidator(bool),
            "max_requests": RangeValidator(1, 100000),
            "window_sec": RangeValidator(1, 86400),
        }


class BookmarksSettings(SettingsGroup):
    group_name = "bookmarks"

    def _initialize_defaults(self) -> None:
        self._defaults = {"default_category": "default"}

    def _setup_validators(self) -> None:
        self._validators = {
            "default_category": CompositeValidator([TypeValidator(str), RegexValidator(r"^.{1,64}$")]),
        }
