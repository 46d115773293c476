"""Простой in-memory кэш со временем жизни записей."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL_SEC = 300.0


class TTLCache:
    """Словарь, записи которого истекают через ttl секунд."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._items: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl_seconds: float = DEFAULT_TTL_SEC) -> None:
        with self._lock:
            self._items[key] = (value, self._clock() + ttl_seconds)

    def get(self, key: str) -> Optional[Any]:
        """Возвращает значение или None, если записи нет или она истекла."""

        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            value, expiry = item
            if self._clock() > expiry:
                del self._items[key]
                return None
            return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def cleanup(self) -> int:
        """Удаляет истёкшие записи и возвращает их количество."""

        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expiry) in self._items.items() if now > expiry]
            for key in expired:
                del self._items[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._items)
