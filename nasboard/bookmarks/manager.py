"""Менеджер закладок: загрузка, CRUD и сохранение в bookmarks.json."""

from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from nasboard.bookmarks.exceptions import BookmarkValidationError
from nasboard.bookmarks.models import Bookmark
from nasboard.settings.validators import UrlValidator
from nasboard.utils.helpers import sanitize_string

URL_VALIDATOR = UrlValidator()
_TEXT_FIELDS = ("title", "description", "category", "icon")


class BookmarkManager:
    """Работает со списком закладок (загрузка/сохранение, CRUD)."""

    def __init__(self, file_path: Path, *, default_category: str = "default") -> None:
        self._file_path = file_path
        self._default_category = default_category
        self._logger = logging.getLogger(__name__)
        self._bookmarks: Dict[str, Bookmark] = {}
        self._lock = threading.RLock()
        self.load_from_disk()

    # ------------------------------------------------------------------ CRUD --
    def list_bookmarks(self) -> List[Bookmark]:
        """Возвращает закладки, упорядоченные по полю order."""

        with self._lock:
            return sorted(self._bookmarks.values(), key=lambda bookmark: bookmark.order)

    def get_bookmark(self, identifier: str) -> Bookmark:
        with self._lock:
            try:
                return self._bookmarks[identifier]
            except KeyError:
                raise KeyError(f"Bookmark '{identifier}' not found") from None

    def create_bookmark(self, data: Dict[str, Any]) -> Bookmark:
        """Создаёт закладку; title и url обязательны, order = max + 1."""

        fields = self._clean_fields(data)
        if not fields.get("title"):
            raise BookmarkValidationError("title", "Title and URL are required")
        if not data.get("url"):
            raise BookmarkValidationError("url", "Title and URL are required")
        url = self._validated_url(data["url"])

        with self._lock:
            timestamp = self._timestamp()
            max_order = max((bookmark.order for bookmark in self._bookmarks.values()), default=0)
            bookmark = Bookmark(
                identifier=uuid.uuid4().hex,
                title=fields["title"],
                url=url,
                description=fields.get("description"),
                category=fields.get("category") or self._default_category,
                icon=fields.get("icon"),
                order=max_order + 1,
                created_at=timestamp,
                updated_at=timestamp,
            )
            self._bookmarks[bookmark.identifier] = bookmark
            self.save_to_disk()
        self._logger.info("Bookmark created: id=%s title=%s", bookmark.identifier, bookmark.title)
        return bookmark

    def update_bookmark(self, identifier: str, data: Dict[str, Any]) -> Bookmark:
        """Частичное обновление: меняются только переданные поля."""

        fields = self._clean_fields(data)
        if "title" in fields and not fields["title"]:
            raise BookmarkValidationError("title", "Title cannot be empty")
        url = self._validated_url(data["url"]) if data.get("url") is not None else None

        with self._lock:
            bookmark = self.get_bookmark(identifier)
            if "title" in fields:
                bookmark.title = fields["title"]
            if url is not None:
                bookmark.url = url
            if "description" in fields:
                bookmark.description = fields["description"]
            if fields.get("category"):
                bookmark.category = fields["category"]
            if "icon" in fields:
                bookmark.icon = fields["icon"]
            if isinstance(data.get("order"), int):
                bookmark.order = data["order"]
            bookmark.updated_at = self._timestamp()
            self.save_to_disk()
        return bookmark

    def delete_bookmark(self, identifier: str) -> None:
        """Удаляет закладку; KeyError, если её нет."""

        with self._lock:
            if identifier not in self._bookmarks:
                raise KeyError(f"Bookmark '{identifier}' not found")
            self._bookmarks.pop(identifier)
            self.save_to_disk()
        self._logger.info("Bookmark deleted: id=%s", identifier)

    # ------------------------------------------------------------- persistence --
    def load_from_disk(self) -> None:
        """Загружает bookmarks.json, создаёт файл при отсутствии."""

        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps({"bookmarks": []}, indent=2), encoding="utf-8")
            self._bookmarks.clear()
            return

        content: Dict[str, Any] = json.loads(self._file_path.read_text(encoding="utf-8"))
        loaded: Dict[str, Bookmark] = {}
        for entry in content.get("bookmarks", []):
            bookmark = Bookmark.from_dict(entry)
            loaded[bookmark.identifier] = bookmark
        self._bookmarks = loaded

    def save_to_disk(self) -> None:
        payload = {"bookmarks": [bookmark.to_dict() for bookmark in self.list_bookmarks()]}
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )

    # ----------------------------------------------------------------- helpers --
    @staticmethod
    def _clean_fields(data: Dict[str, Any]) -> Dict[str, Optional[str]]:
        cleaned: Dict[str, Optional[str]] = {}
        for name in _TEXT_FIELDS:
            if name not in data:
                continue
            value = data[name]
            cleaned[name] = sanitize_string(str(value).strip()) if value is not None else None
        return cleaned

    @staticmethod
    def _validated_url(value: Any) -> str:
        is_valid, error = URL_VALIDATOR.validate(value)
        if not is_valid:
            raise BookmarkValidationError("url", error)
        return str(value).strip()

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(UTC).isoformat()
