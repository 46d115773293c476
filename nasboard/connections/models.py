"""Модели данных для описания транспортов до Docker daemon."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TransportKind(str, Enum):
    """Канал, по которому клиент достигает daemon."""

    LOCAL_SOCKET = "local-socket"
    NAMED_PIPE = "named-pipe"
    TCP = "tcp"


@dataclass(frozen=True, slots=True)
class TransportDescriptor:
    """Неизменяемое описание одного транспорта."""

    kind: TransportKind
    address: str  # base_url в формате docker SDK: unix://, npipe://, tcp://
    timeout: Optional[float] = None  # секунды

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует дескриптор в словарь."""

        return {
            "kind": self.kind.value,
            "address": self.address,
            "timeout": self.timeout,
        }


@dataclass(slots=True)
class ConnectionTestResult:
    """Результат одной проверки доступности daemon."""

    success: bool
    method: Optional[TransportKind] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Формирует ответ для эндпоинта статуса."""

        payload: Dict[str, Any] = {"connected": self.success}
        if self.method is not None:
            payload["method"] = self.method.value
        if self.error is not None:
            payload["error"] = self.error
        return payload
