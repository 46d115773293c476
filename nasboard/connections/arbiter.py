"""Выбор рабочего Docker клиента: primary с деградацией на TCP fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from nasboard.connections.models import ConnectionTestResult, TransportKind
from nasboard.connections.transport import DockerConnectionConfig, select_transports
from nasboard.docker_api.client import DaemonClient
from nasboard.docker_api.exceptions import DockerConnectionError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedClient:
    """Клиент, прошедший проверку в рамках одного вызова, и способ подключения."""

    client: DaemonClient
    method: TransportKind


class ConnectionArbiter:
    """Владеет парой клиентов (primary, fallback) и выбирает доступный на каждый вызов.

    Результат выбора не кэшируется: доступность daemon перепроверяется при
    каждом обращении, поскольку daemon может быть перезапущен между вызовами.
    """

    def __init__(
        self,
        primary: DaemonClient,
        fallback: DaemonClient,
        *,
        fallback_enabled: bool,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.fallback_enabled = fallback_enabled

    @classmethod
    def from_config(cls, config: DockerConnectionConfig, *, stop_timeout: int = 10) -> "ConnectionArbiter":
        """Строит оба клиента по выбранным транспортам."""

        primary_transport, fallback_transport = select_transports(config)
        LOGGER.info(
            "Docker transports: primary=%s (%s), fallback=%s (%s), fallback enabled=%s",
            primary_transport.kind.value,
            primary_transport.address,
            fallback_transport.kind.value,
            fallback_transport.address,
            config.is_desktop,
        )
        return cls(
            DaemonClient(primary_transport, stop_timeout=stop_timeout),
            DaemonClient(fallback_transport, stop_timeout=stop_timeout),
            fallback_enabled=config.is_desktop,
        )

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "ConnectionArbiter":
        config = DockerConnectionConfig.from_settings(settings, **kwargs)
        stop_timeout = int(settings.get_value("docker", "stop_timeout_sec", default=10))
        return cls.from_config(config, stop_timeout=stop_timeout)

    # ------------------------------------------------------------------ API --
    def resolve_client(self, *, allow_fallback: Optional[bool] = None) -> ResolvedClient:
        """Возвращает первый клиент, ответивший на ping.

        Fallback опрашивается только на десктопной платформе. Если все
        применимые проверки провалились, поднимается DockerConnectionError;
        при двух отказах сообщение содержит обе причины.
        """

        use_fallback = self.fallback_enabled if allow_fallback is None else (
            allow_fallback and self.fallback_enabled
        )
        try:
            self.primary.probe()
            return ResolvedClient(self.primary, self.primary.transport.kind)
        except DockerConnectionError as primary_error:
            if not use_fallback:
                raise
            LOGGER.warning(
                "Primary Docker connection (%s) failed, trying fallback: %s",
                self.primary.transport.kind.value,
                primary_error,
            )
            try:
                self.fallback.probe()
            except DockerConnectionError as fallback_error:
                LOGGER.error("Fallback Docker connection also failed: %s", fallback_error)
                raise DockerConnectionError(
                    f"Primary ({self.primary.transport.kind.value}): {primary_error}; "
                    f"Fallback ({self.fallback.transport.kind.value}): {fallback_error}"
                ) from fallback_error
            return ResolvedClient(self.fallback, self.fallback.transport.kind)

    def test_connection(self) -> ConnectionTestResult:
        """Проверка для эндпоинта статуса; никогда не бросает исключение."""

        try:
            resolved = self.resolve_client()
        except DockerConnectionError as exc:
            return ConnectionTestResult(success=False, error=str(exc))
        return ConnectionTestResult(success=True, method=resolved.method)

    def close(self) -> None:
        self.primary.close()
        self.fallback.close()
