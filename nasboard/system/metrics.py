"""Снимок системных метрик хоста при помощи psutil."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import psutil

LOGGER = logging.getLogger(__name__)

LOOPBACK_PREFIXES = ("lo", "Loopback")


@dataclass(slots=True)
class CpuInfo:
    usage: float = 0.0
    cores: int = 1


@dataclass(slots=True)
class UsageInfo:
    """Объём и заполненность памяти или диска, в байтах и процентах."""

    total: int = 0
    used: int = 0
    free: int = 0
    usage: float = 0.0


@dataclass(slots=True)
class NetworkInfo:
    rx: int = 0
    tx: int = 0


@dataclass(slots=True)
class SystemSnapshot:
    """Контейнер с основными системными метриками."""

    cpu: CpuInfo = field(default_factory=CpuInfo)
    memory: UsageInfo = field(default_factory=UsageInfo)
    disk: UsageInfo = field(default_factory=UsageInfo)
    network: Optional[NetworkInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        if self.network is None:
            payload.pop("network")
        return payload


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100.0, 2)


def read_system_metrics(disk_path: str = "/") -> SystemSnapshot:
    """Синхронно снимает метрики; при ошибке psutil возвращает нулевой снимок."""

    try:
        cpu_usage = psutil.cpu_percent(interval=None)
        cores = psutil.cpu_count(logical=True) or 1
        memory = psutil.virtual_memory()
        disk = psutil.disk_usage(disk_path)
        counters = psutil.net_io_counters(pernic=True)
    except (OSError, RuntimeError, psutil.Error) as exc:
        LOGGER.error("Error fetching system info: %s", exc)
        return SystemSnapshot()

    rx = 0
    tx = 0
    for name, stats in counters.items():
        if name.startswith(LOOPBACK_PREFIXES):
            continue
        rx += stats.bytes_recv
        tx += stats.bytes_sent

    return SystemSnapshot(
        cpu=CpuInfo(usage=round(cpu_usage, 2), cores=cores),
        memory=UsageInfo(
            total=memory.total,
            used=memory.used,
            free=memory.free,
            usage=_percent(memory.total - memory.available, memory.total),
        ),
        disk=UsageInfo(
            total=disk.total,
            used=disk.used,
            free=disk.free,
            usage=_percent(disk.used, disk.total),
        ),
        network=NetworkInfo(rx=rx, tx=tx),
    )


async def read_system_snapshot(disk_path: str = "/") -> SystemSnapshot:
    """Асинхронный вариант: psutil вызывается в пуле потоков, не блокируя event loop."""

    return await asyncio.to_thread(read_system_metrics, disk_path)
