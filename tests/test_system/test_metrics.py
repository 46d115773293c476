"""Тесты снятия системных метрик через psutil."""

from __future__ import annotations

import asyncio
from collections import namedtuple

import psutil

from nasboard.system.metrics import read_system_metrics, read_system_snapshot

VirtualMemory = namedtuple("VirtualMemory", "total available used free")
DiskUsage = namedtuple("DiskUsage", "total used free percent")
NetIO = namedtuple("NetIO", "bytes_sent bytes_recv")


def _patch_psutil(monkeypatch) -> None:
    monkeypatch.setattr(psutil, "cpu_percent", lambda interval=None: 37.456)
    monkeypatch.setattr(psutil, "cpu_count", lambda logical=True: 4)
    monkeypatch.setattr(psutil, "virtual_memory", lambda: VirtualMemory(8000, 2000, 5000, 1000))
    monkeypatch.setattr(psutil, "disk_usage", lambda path: DiskUsage(1000, 250, 750, 25.0))
    monkeypatch.setattr(
        psutil,
        "net_io_counters",
        lambda pernic=True: {"lo": NetIO(999, 999), "eth0": NetIO(10, 20), "wlan0": NetIO(1, 2)},
    )


def test_read_system_metrics(monkeypatch) -> None:
    _patch_psutil(monkeypatch)
    snapshot = read_system_metrics("/srv").to_dict()
    assert snapshot["cpu"] == {"usage": 37.46, "cores": 4}
    assert snapshot["memory"] == {"total": 8000, "used": 5000, "free": 1000, "usage": 75.0}
    assert snapshot["disk"]["usage"] == 25.0
    assert snapshot["network"] == {"rx": 22, "tx": 11}


def test_read_system_metrics_returns_defaults_on_error(monkeypatch, caplog) -> None:
    _patch_psutil(monkeypatch)

    def broken(path):
        raise OSError("no such mount")

    monkeypatch.setattr(psutil, "disk_usage", broken)
    snapshot = read_system_metrics("/missing")
    assert snapshot.cpu.cores == 1
    assert "network" not in snapshot.to_dict()
    assert "no such mount" in caplog.text


def test_read_system_snapshot_runs_in_thread(monkeypatch) -> None:
    _patch_psutil(monkeypatch)
    snapshot = asyncio.run(read_system_snapshot())
    assert snapshot.cpu.usage == 37.46
