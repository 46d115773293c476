"""Обёртка над docker-py, привязанная к одному транспорту."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, TypeVar

import docker
from docker.errors import APIError, DockerException, NotFound
from requests.exceptions import RequestException

from nasboard.connections.models import TransportDescriptor
from nasboard.docker_api.exceptions import (
    ContainerConflictError,
    ContainerNotFoundError,
    DockerAPIError,
    DockerConnectionError,
    MalformedResponseError,
)
from nasboard.docker_api.models import RawContainerRecord, RawStatsSample

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_STOP_TIMEOUT_SEC = 10


class DaemonClient:
    """Тонкий доступ к daemon через один транспорт. Повторов здесь нет."""

    def __init__(
        self,
        transport: TransportDescriptor,
        raw_client: Any | None = None,
        *,
        stop_timeout: int = DEFAULT_STOP_TIMEOUT_SEC,
    ) -> None:
        self.transport = transport
        self.stop_timeout = stop_timeout
        self._client = raw_client
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"DaemonClient({self.transport.kind.value}, {self.transport.address})"

    # ------------------------------------------------------------------ API --
    def probe(self) -> None:
        """Проверяет, что daemon отвечает на ping, иначе DockerConnectionError."""

        try:
            answered = self._call("ping", lambda raw: raw.ping())
        except DockerConnectionError:
            raise
        except DockerAPIError as exc:
            # daemon ответил HTTP-ошибкой на ping (например, остановленный engine)
            raise DockerConnectionError(str(exc)) from exc
        if not answered:
            raise DockerConnectionError(f"Docker daemon at {self.transport.address} did not answer ping")

    def list_containers(self, include_stopped: bool = True) -> List[RawContainerRecord]:
        """Возвращает сырые записи контейнеров."""

        records: List[Dict[str, Any]] = self._call(
            "list containers", lambda raw: raw.api.containers(all=include_stopped)
        )
        return _parse("container list", lambda: [RawContainerRecord.from_api(record) for record in records])

    def get_container(self, container_id: str) -> "ContainerHandle":
        """Возвращает ленивый хэндл контейнера, без обращения к daemon."""

        return ContainerHandle(self, container_id)

    def close(self) -> None:
        """Закрывает HTTP-сессию docker SDK, если она была создана."""

        with self._lock:
            client, self._client = self._client, None
        if client is not None and hasattr(client, "close"):
            client.close()

    # -------------------------------------------------------------- helpers --
    def _raw(self) -> Any:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def _create_client(self) -> Any:
        kwargs: Dict[str, Any] = {"base_url": self.transport.address}
        if self.transport.timeout is not None:
            kwargs["timeout"] = self.transport.timeout
        return docker.DockerClient(**kwargs)

    def _call(self, operation: str, func: Callable[[Any], T]) -> T:
        """Выполняет вызов SDK и переводит его исключения в иерархию DockerAPIError."""

        try:
            return func(self._raw())
        except NotFound as exc:
            raise ContainerNotFoundError(_explain(exc)) from exc
        except APIError as exc:
            if exc.status_code == 409:
                raise ContainerConflictError(_explain(exc)) from exc
            raise DockerAPIError(_explain(exc)) from exc
        except (DockerException, RequestException, OSError) as exc:
            LOGGER.debug(
                "Docker %s failed via %s (%s): %s",
                operation,
                self.transport.kind.value,
                self.transport.address,
                exc,
            )
            raise DockerConnectionError(str(exc) or exc.__class__.__name__) from exc


class ContainerHandle:
    """Операции над одним контейнером через связанный DaemonClient."""

    def __init__(self, client: DaemonClient, container_id: str) -> None:
        self.client = client
        self.container_id = container_id

    def start(self) -> None:
        self.client._call("start", lambda raw: raw.api.start(self.container_id))

    def stop(self, timeout: Optional[int] = None) -> None:
        stop_timeout = self.client.stop_timeout if timeout is None else timeout
        self.client._call("stop", lambda raw: raw.api.stop(self.container_id, timeout=stop_timeout))

    def restart(self, timeout: Optional[int] = None) -> None:
        stop_timeout = self.client.stop_timeout if timeout is None else timeout
        self.client._call(
            "restart", lambda raw: raw.api.restart(self.container_id, timeout=stop_timeout)
        )

    def inspect(self) -> Dict[str, Any]:
        return self.client._call("inspect", lambda raw: raw.api.inspect_container(self.container_id))

    def stats(self) -> RawStatsSample:
        """Один нестримовый снимок статистики."""

        payload: Dict[str, Any] = self.client._call(
            "stats", lambda raw: raw.api.stats(self.container_id, stream=False)
        )
        return _parse("stats", lambda: RawStatsSample.from_api(payload))


def _explain(exc: APIError) -> str:
    return str(exc.explanation or exc)


def _parse(what: str, build: Callable[[], T]) -> T:
    """Строит typed-записи из ответа daemon; некорректный ответ -> MalformedResponseError."""

    try:
        return build()
    except (TypeError, ValueError, KeyError, AttributeError) as exc:
        raise MalformedResponseError(f"Malformed {what} response from Docker daemon: {exc}") from exc
