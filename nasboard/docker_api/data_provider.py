"""Менеджер доступа к данным Docker для HTTP-слоя.

Объединяет `ConnectionArbiter`, список контейнеров, управление жизненным
циклом и расчёт статистики в одном объекте, который создаётся один раз на
процесс и передаётся в роутеры через `app.state`.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from nasboard.connections.arbiter import ConnectionArbiter
from nasboard.connections.models import ConnectionTestResult
from nasboard.docker_api.containers import ContainerAction, ContainerDirectory, LifecycleController
from nasboard.docker_api.models import ActionResult, ContainerSummary, UtilizationSnapshot
from nasboard.docker_api.stats import StatsTranslator

LOGGER = logging.getLogger(__name__)


class DockerDataProvider:
    """Предоставляет высокоуровневый API для работы с Docker-данными."""

    def __init__(self, arbiter: ConnectionArbiter, *, stats_use_fallback: bool = False) -> None:
        self.arbiter = arbiter
        self.directory = ContainerDirectory(arbiter)
        self.lifecycle = LifecycleController(arbiter)
        self.stats = StatsTranslator(arbiter, use_fallback=stats_use_fallback)

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "DockerDataProvider":
        arbiter = ConnectionArbiter.from_settings(settings, **kwargs)
        stats_use_fallback = bool(settings.get_value("docker", "stats_use_fallback", default=False))
        return cls(arbiter, stats_use_fallback=stats_use_fallback)

    def connection_status(self) -> ConnectionTestResult:
        """Проверяет доступность daemon."""

        result = self.arbiter.test_connection()
        if result.success:
            LOGGER.debug("Docker connected via %s", result.method)
        else:
            LOGGER.error("Docker connection failed: %s", result.error)
        return result

    def fetch_containers(self) -> List[ContainerSummary]:
        """Возвращает список контейнеров или пустой список при недоступности daemon."""

        return self.directory.list_all()

    def perform_action(self, container_id: str, action: ContainerAction | str) -> ActionResult:
        """Выполняет start/stop/restart."""

        return self.lifecycle.perform_action(container_id, action)

    def fetch_container_stats(self, container_id: str) -> Optional[UtilizationSnapshot]:
        """Возвращает утилизацию контейнера или None."""

        return self.stats.compute_utilization(container_id)

    def close(self) -> None:
        self.arbiter.close()
