"""Структуры данных для сырых ответов daemon и нормализованных представлений."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# --------------------------------------------------------------------- raw --
@dataclass(frozen=True, slots=True)
class RawPort:
    """Элемент `Ports` из ответа `GET /containers/json`."""

    private_port: int
    public_port: Optional[int]
    type: str
    ip: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RawPort":
        public_port = data.get("PublicPort")
        return cls(
            private_port=int(data.get("PrivatePort", 0)),
            public_port=int(public_port) if public_port else None,
            type=data.get("Type", "tcp"),
            ip=data.get("IP"),
        )


@dataclass(frozen=True, slots=True)
class RawContainerRecord:
    """Запись контейнера в том виде, как её вернул daemon."""

    id: str
    names: List[str]
    image: str
    status: str
    state: str
    ports: List[RawPort]
    created: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RawContainerRecord":
        return cls(
            id=data.get("Id", ""),
            names=[str(name) for name in data.get("Names") or []],
            image=data.get("Image", ""),
            status=data.get("Status", ""),
            state=data.get("State", ""),
            ports=[RawPort.from_api(port) for port in data.get("Ports") or []],
            created=int(data.get("Created", 0)),
        )


@dataclass(frozen=True, slots=True)
class CpuSample:
    """Счётчики CPU из одного снимка (`cpu_stats` или `precpu_stats`)."""

    total_usage: int
    system_usage: int
    online_cpus: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CpuSample":
        cpu_usage = data.get("cpu_usage") or {}
        online = data.get("online_cpus") or len(cpu_usage.get("percpu_usage") or []) or 1
        return cls(
            total_usage=int(cpu_usage.get("total_usage", 0)),
            system_usage=int(data.get("system_cpu_usage", 0)),
            online_cpus=int(online),
        )


@dataclass(frozen=True, slots=True)
class RawStatsSample:
    """Нестримовый ответ `GET /containers/{id}/stats?stream=false`."""

    cpu: CpuSample
    precpu: CpuSample
    memory_usage: int
    memory_limit: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RawStatsSample":
        memory = data.get("memory_stats") or {}
        return cls(
            cpu=CpuSample.from_api(data.get("cpu_stats") or {}),
            precpu=CpuSample.from_api(data.get("precpu_stats") or {}),
            memory_usage=int(memory.get("usage", 0)),
            memory_limit=int(memory.get("limit", 0)),
        )


# -------------------------------------------------------------- normalized --
@dataclass(frozen=True, slots=True)
class PortBinding:
    """Проброс порта контейнера."""

    private_port: int
    protocol_type: str
    public_port: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"privatePort": self.private_port}
        if self.public_port is not None:
            payload["publicPort"] = self.public_port
        payload["type"] = self.protocol_type
        return payload


@dataclass(frozen=True, slots=True)
class ContainerSummary:
    """Нормализованное представление контейнера для интерфейса."""

    id: str
    name: str
    image: str
    status: str
    state: str
    ports: List[PortBinding] = field(default_factory=list)
    created: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "status": self.status,
            "state": self.state,
            "ports": [port.to_dict() for port in self.ports],
            "created": self.created,
        }


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Итог действия над контейнером."""

    success: bool
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UtilizationSnapshot:
    """Мгновенная утилизация CPU и памяти контейнера."""

    cpu_usage_percent: float
    memory_usage_percent: float
    memory_limit_bytes: int
    memory_used_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cpuUsage": self.cpu_usage_percent,
            "memoryUsage": self.memory_usage_percent,
            "memoryLimit": self.memory_limit_bytes,
            "memoryUsed": self.memory_used_bytes,
        }
