"""Исключения хранилища закладок."""

from __future__ import annotations


class BookmarkValidationError(ValueError):
    """Некорректные поля закладки (пустой title, невалидный url)."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")
