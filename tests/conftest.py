"""Общие фикстуры: поддельный docker SDK клиент и фабрики DaemonClient/арбитра."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests
from docker.errors import APIError
from requests.exceptions import ConnectionError as RequestsConnectionError

from nasboard.connections.arbiter import ConnectionArbiter
from nasboard.connections.models import TransportDescriptor, TransportKind
from nasboard.docker_api.client import DaemonClient
from nasboard.settings.registry import SettingsRegistry

FULL_ID = ("4f66ad9a0b2e" + "0123456789abcdef" * 4)[:64]
SHORT_ID = FULL_ID[:12]


def make_container_record(**overrides: Any) -> Dict[str, Any]:
    """Запись в формате GET /containers/json."""

    record = {
        "Id": FULL_ID,
        "Names": ["/web-1"],
        "Image": "nginx:latest",
        "Status": "Up 2 hours",
        "State": "running",
        "Ports": [
            {"IP": "0.0.0.0", "PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"},
            {"PrivatePort": 443, "Type": "tcp"},
        ],
        "Created": 1700000000,
    }
    record.update(overrides)
    return record


def make_stats_payload(
    *,
    total: int = 1200,
    pre_total: int = 1000,
    system: int = 11000,
    pre_system: int = 10000,
    online_cpus: int = 4,
    usage: int = 512_000_000,
    limit: int = 1_000_000_000,
) -> Dict[str, Any]:
    """Ответ GET /containers/{id}/stats?stream=false."""

    return {
        "cpu_stats": {
            "cpu_usage": {"total_usage": total},
            "system_cpu_usage": system,
            "online_cpus": online_cpus,
        },
        "precpu_stats": {
            "cpu_usage": {"total_usage": pre_total},
            "system_cpu_usage": pre_system,
        },
        "memory_stats": {"usage": usage, "limit": limit},
    }


class FakeAPI:
    """Низкоуровневый APIClient: записывает вызовы, может бросать заданное исключение."""

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = [make_container_record()]
        self.stats_payload: Dict[str, Any] = make_stats_payload()
        self.calls: List[tuple] = []
        self.error: Optional[Exception] = None

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    def containers(self, all: bool = False) -> List[Dict[str, Any]]:
        self._record("containers", all)
        return self.records

    def start(self, container_id: str) -> None:
        self._record("start", container_id)

    def stop(self, container_id: str, timeout: Optional[int] = None) -> None:
        self._record("stop", container_id, timeout)

    def restart(self, container_id: str, timeout: Optional[int] = None) -> None:
        self._record("restart", container_id, timeout)

    def inspect_container(self, container_id: str) -> Dict[str, Any]:
        self._record("inspect", container_id)
        return {"Id": container_id, "State": {"Status": "running"}}

    def stats(self, container_id: str, stream: bool = True) -> Dict[str, Any]:
        self._record("stats", container_id, stream)
        return self.stats_payload


class FakeRawClient:
    """Заменяет docker.DockerClient."""

    def __init__(self, ping_error: Optional[Exception] = None) -> None:
        self.api = FakeAPI()
        self.ping_error = ping_error
        self.pings = 0
        self.closed = False

    def ping(self) -> bool:
        self.pings += 1
        if self.ping_error is not None:
            raise self.ping_error
        return True

    def close(self) -> None:
        self.closed = True


def unreachable(message: str) -> RequestsConnectionError:
    return RequestsConnectionError(message)


def daemon_http_error(status_code: int, explanation: str) -> APIError:
    """APIError, как его поднимает docker SDK на HTTP-ответ daemon с ошибкой."""

    response = requests.Response()
    response.status_code = status_code
    return APIError(str(status_code), response=response, explanation=explanation)


PRIMARY_PIPE = TransportDescriptor(TransportKind.NAMED_PIPE, "npipe:////./pipe/docker_engine", 5.0)
PRIMARY_SOCKET = TransportDescriptor(TransportKind.LOCAL_SOCKET, "unix:///var/run/docker.sock", 5.0)
FALLBACK_TCP = TransportDescriptor(TransportKind.TCP, "tcp://127.0.0.1:2375", 5.0)


def make_arbiter(
    *,
    desktop: bool = True,
    primary_error: Optional[Exception] = None,
    fallback_error: Optional[Exception] = None,
) -> ConnectionArbiter:
    primary_transport = PRIMARY_PIPE if desktop else PRIMARY_SOCKET
    primary = DaemonClient(primary_transport, raw_client=FakeRawClient(primary_error))
    fallback = DaemonClient(FALLBACK_TCP, raw_client=FakeRawClient(fallback_error))
    return ConnectionArbiter(primary, fallback, fallback_enabled=desktop)


@pytest.fixture
def settings(tmp_path: Path) -> SettingsRegistry:
    registry = SettingsRegistry(tmp_path / "config.json")
    registry.reset_to_defaults()
    return registry


def make_app(settings: SettingsRegistry, tmp_path: Path, arbiter: Optional[ConnectionArbiter] = None, **kwargs: Any):
    """Приложение с поддельным daemon и закладками во временном каталоге."""

    from nasboard.app import create_application
    from nasboard.bookmarks.manager import BookmarkManager
    from nasboard.docker_api.data_provider import DockerDataProvider

    provider = DockerDataProvider(arbiter or make_arbiter(desktop=False))
    manager = BookmarkManager(tmp_path / "bookmarks.json")
    return create_application(settings, provider, manager, **kwargs)
