"""Модель закладки."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class Bookmark:
    """Ссылка на сервис в домашней сети."""

    identifier: str
    title: str
    url: str
    description: Optional[str] = None
    category: str = "default"
    icon: Optional[str] = None
    order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует модель в dict."""

        return {
            "id": self.identifier,
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "category": self.category,
            "icon": self.icon,
            "order": self.order,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bookmark":
        identifier = data.get("id") or data.get("identifier")
        if not identifier:
            raise ValueError("Bookmark id is required")
        return cls(
            identifier=identifier,
            title=data.get("title", ""),
            url=data.get("url", ""),
            description=data.get("description"),
            category=data.get("category") or "default",
            icon=data.get("icon"),
            order=int(data.get("order", 0)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
