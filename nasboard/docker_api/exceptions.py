"""Исключения слоя доступа к Docker daemon."""

from __future__ import annotations


class DockerAPIError(Exception):
    """Базовая ошибка работы с Docker daemon."""


class DockerConnectionError(DockerAPIError):
    """Daemon недоступен: нет сокета, таймаут, отказ в доступе."""


class ContainerNotFoundError(DockerAPIError):
    """Контейнер с указанным идентификатором не существует."""


class ContainerConflictError(DockerAPIError):
    """Daemon отклонил смену состояния контейнера (HTTP 409)."""


class ContainerValidationError(DockerAPIError):
    """Некорректный идентификатор контейнера или действие до обращения к daemon."""


class StatsComputationError(DockerAPIError):
    """Вырожденные знаменатели при расчёте утилизации."""


class MalformedResponseError(DockerAPIError):
    """Ответ daemon не соответствует ожидаемой структуре."""
