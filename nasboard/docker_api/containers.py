"""Список контейнеров и управление их жизненным циклом."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from nasboard.connections.arbiter import ConnectionArbiter
from nasboard.docker_api.exceptions import ContainerValidationError, DockerAPIError
from nasboard.docker_api.models import (
    ActionResult,
    ContainerSummary,
    PortBinding,
    RawContainerRecord,
)
from nasboard.settings.validators import RegexValidator

LOGGER = logging.getLogger(__name__)

SHORT_ID_LENGTH = 12
UNKNOWN_NAME = "unknown"
CONTAINER_ID_VALIDATOR = RegexValidator(r"[a-fA-F0-9]{12}|[a-fA-F0-9]{64}")


class ContainerAction(str, Enum):
    """Поддерживаемые действия над контейнером."""

    START = "start"
    STOP = "stop"
    RESTART = "restart"


def summarize_container(record: RawContainerRecord) -> ContainerSummary:
    """Переводит сырую запись daemon в ContainerSummary."""

    name = record.names[0].removeprefix("/") if record.names else ""
    return ContainerSummary(
        id=record.id[:SHORT_ID_LENGTH],
        name=name or UNKNOWN_NAME,
        image=record.image,
        status=record.status,
        state=record.state,
        ports=[
            PortBinding(
                private_port=port.private_port,
                public_port=port.public_port,
                protocol_type=port.type,
            )
            for port in record.ports
        ],
        created=record.created,
    )


def validate_container_id(container_id: str) -> str:
    """Проверяет, что id состоит из 12 или 64 hex-символов."""

    is_valid, error = CONTAINER_ID_VALIDATOR.validate(container_id)
    if not is_valid:
        raise ContainerValidationError(f"Invalid container ID: {error}")
    return container_id


def parse_action(action: str) -> ContainerAction:
    try:
        return ContainerAction(action)
    except ValueError:
        raise ContainerValidationError(f"Invalid action: {action!r}") from None


class ContainerDirectory:
    """Список всех контейнеров, включая остановленные."""

    def __init__(self, arbiter: ConnectionArbiter) -> None:
        self._arbiter = arbiter

    def list_all(self) -> List[ContainerSummary]:
        """При любой ошибке возвращает пустой список и пишет её в лог."""

        try:
            resolved = self._arbiter.resolve_client()
            records = resolved.client.list_containers(include_stopped=True)
        except DockerAPIError as exc:
            LOGGER.error("Error fetching containers: %s", exc)
            return []
        return [summarize_container(record) for record in records]


class LifecycleController:
    """Запускает, останавливает и перезапускает контейнеры.

    Текущее состояние контейнера заранее не проверяется: повторный start или
    stop обрабатывается так, как решит daemon.
    """

    def __init__(self, arbiter: ConnectionArbiter) -> None:
        self._arbiter = arbiter

    def perform_action(self, container_id: str, action: ContainerAction | str) -> ActionResult:
        """Выполняет действие. ContainerValidationError поднимается до обращения к daemon."""

        validate_container_id(container_id)
        action = parse_action(action) if not isinstance(action, ContainerAction) else action
        try:
            resolved = self._arbiter.resolve_client()
            handle = resolved.client.get_container(container_id)
            if action is ContainerAction.START:
                handle.start()
            elif action is ContainerAction.STOP:
                handle.stop()
            else:
                handle.restart()
        except DockerAPIError as exc:
            LOGGER.error("Error during %s of container %s: %s", action.value, container_id, exc)
            return ActionResult(success=False, error=str(exc))
        LOGGER.info("Container %s: %s done", container_id, action.value)
        return ActionResult(success=True)

    def start(self, container_id: str) -> ActionResult:
        return self.perform_action(container_id, ContainerAction.START)

    def stop(self, container_id: str) -> ActionResult:
        return self.perform_action(container_id, ContainerAction.STOP)

    def restart(self, container_id: str) -> ActionResult:
        return self.perform_action(container_id, ContainerAction.RESTART)
