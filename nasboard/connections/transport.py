"""Выбор транспорта до Docker daemon по платформе и контексту запуска."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from nasboard.connections.models import TransportDescriptor, TransportKind
from nasboard.utils.helpers import normalize_socket_path

DESKTOP_PLATFORM = "Windows"
DEFAULT_SOCKET_PATH = "unix:///var/run/docker.sock"
DEFAULT_NAMED_PIPE_PATH = "npipe:////./pipe/docker_engine"
DEFAULT_FALLBACK_HOST = "127.0.0.1"
DEFAULT_FALLBACK_PORT = 2375
DEFAULT_TIMEOUT_SEC = 5.0


def is_desktop_platform(system_name: str) -> bool:
    """True для платформы, где daemon доступен через named pipe (Docker Desktop)."""

    return system_name == DESKTOP_PLATFORM


def detect_in_container(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Определяет запуск внутри контейнера по переменным окружения."""

    env = os.environ if environ is None else environ
    if env.get("DOCKER_CONTAINER", "").lower() == "true":
        return True
    return "production" in (env.get("NODE_ENV", "").lower(), env.get("NASBOARD_ENV", "").lower())


@dataclass(frozen=True, slots=True)
class DockerConnectionConfig:
    """Параметры подключения, фиксируемые один раз при старте процесса."""

    system_name: str
    in_container: bool
    socket_path: str = DEFAULT_SOCKET_PATH
    named_pipe_path: str = DEFAULT_NAMED_PIPE_PATH
    fallback_host: str = DEFAULT_FALLBACK_HOST
    fallback_port: int = DEFAULT_FALLBACK_PORT
    primary_timeout: float = DEFAULT_TIMEOUT_SEC
    fallback_timeout: float = DEFAULT_TIMEOUT_SEC

    @property
    def is_desktop(self) -> bool:
        return is_desktop_platform(self.system_name)

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        *,
        system_name: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DockerConnectionConfig":
        """Собирает конфигурацию из группы настроек `docker`."""

        group = settings.get_group("docker")
        in_container = group.get("in_container")
        if in_container is None:
            in_container = detect_in_container(environ)
        return cls(
            system_name=system_name or platform.system(),
            in_container=bool(in_container),
            socket_path=normalize_socket_path(group.get("socket_path")),
            named_pipe_path=group.get("named_pipe_path"),
            fallback_host=group.get("fallback_host"),
            fallback_port=int(group.get("fallback_port")),
            primary_timeout=float(group.get("primary_timeout_sec")),
            fallback_timeout=float(group.get("fallback_timeout_sec")),
        )


def select_primary_transport(config: DockerConnectionConfig) -> TransportDescriptor:
    """Named pipe на десктопе вне контейнера, иначе локальный unix-сокет."""

    if config.is_desktop and not config.in_container:
        return TransportDescriptor(
            kind=TransportKind.NAMED_PIPE,
            address=config.named_pipe_path,
            timeout=config.primary_timeout,
        )
    return TransportDescriptor(
        kind=TransportKind.LOCAL_SOCKET,
        address=config.socket_path,
        timeout=config.primary_timeout,
    )


def select_fallback_transport(config: DockerConnectionConfig) -> TransportDescriptor:
    """TCP на loopback, строится всегда, независимо от платформы."""

    return TransportDescriptor(
        kind=TransportKind.TCP,
        address=f"tcp://{config.fallback_host}:{config.fallback_port}",
        timeout=config.fallback_timeout,
    )


def select_transports(config: DockerConnectionConfig) -> Tuple[TransportDescriptor, TransportDescriptor]:
    """Возвращает пару (primary, fallback). Доступность здесь не проверяется."""

    return select_primary_transport(config), select_fallback_transport(config)
