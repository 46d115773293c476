"""Перевод накопительных счётчиков docker stats в проценты утилизации."""

from __future__ import annotations

import logging
from typing import Optional

from nasboard.connections.arbiter import ConnectionArbiter
from nasboard.docker_api.exceptions import DockerAPIError, StatsComputationError
from nasboard.docker_api.models import RawStatsSample, UtilizationSnapshot
from nasboard.utils.helpers import format_bytes

LOGGER = logging.getLogger(__name__)


def compute_cpu_percent(sample: RawStatsSample) -> float:
    """(cpuDelta / systemDelta) * online_cpus * 100, округлённое до сотых."""

    cpu_delta = sample.cpu.total_usage - sample.precpu.total_usage
    system_delta = sample.cpu.system_usage - sample.precpu.system_usage
    if system_delta <= 0:
        raise StatsComputationError(f"System CPU delta is {system_delta}, cannot compute CPU usage")
    return round(cpu_delta / system_delta * sample.cpu.online_cpus * 100.0, 2)


def compute_memory_percent(sample: RawStatsSample) -> float:
    if sample.memory_limit <= 0:
        raise StatsComputationError("Memory limit is 0, cannot compute memory usage")
    return round(sample.memory_usage / sample.memory_limit * 100.0, 2)


def compute_utilization(sample: RawStatsSample) -> UtilizationSnapshot:
    """Чистая функция: снимок статистики -> UtilizationSnapshot."""

    return UtilizationSnapshot(
        cpu_usage_percent=compute_cpu_percent(sample),
        memory_usage_percent=compute_memory_percent(sample),
        memory_limit_bytes=sample.memory_limit,
        memory_used_bytes=sample.memory_usage,
    )


class StatsTranslator:
    """Получает один снимок stats и считает утилизацию.

    По умолчанию используется только primary клиент; `use_fallback=True`
    разрешает тот же путь деградации на TCP, что и у остальных операций.
    """

    def __init__(self, arbiter: ConnectionArbiter, *, use_fallback: bool = False) -> None:
        self._arbiter = arbiter
        self.use_fallback = use_fallback

    def compute_utilization(self, container_id: str) -> Optional[UtilizationSnapshot]:
        """Возвращает None при любой ошибке daemon или вырожденных данных."""

        try:
            resolved = self._arbiter.resolve_client(allow_fallback=self.use_fallback)
            sample = resolved.client.get_container(container_id).stats()
            snapshot = compute_utilization(sample)
        except DockerAPIError as exc:
            LOGGER.error("Error fetching container stats for %s: %s", container_id, exc)
            return None
        LOGGER.debug(
            "Container %s: cpu %.2f%%, memory %s of %s",
            container_id,
            snapshot.cpu_usage_percent,
            format_bytes(snapshot.memory_used_bytes),
            format_bytes(snapshot.memory_limit_bytes),
        )
        return snapshot
