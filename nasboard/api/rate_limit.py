"""Ограничение частоты запросов к /api по IP клиента (фиксированное окно)."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_SEC = 60.0


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Счётчик запросов на клиента, сбрасывающийся каждые window секунд."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_sec: float = DEFAULT_WINDOW_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def hit(self, client_id: str) -> Tuple[bool, int]:
        """Учитывает запрос; возвращает (разрешён, сколько осталось в окне)."""

        now = self._clock()
        with self._lock:
            self._prune(now)
            window = self._windows.get(client_id)
            if window is None or window.reset_at < now:
                self._windows[client_id] = _Window(count=1, reset_at=now + self.window_sec)
                return True, self.max_requests - 1
            if window.count >= self.max_requests:
                return False, 0
            window.count += 1
            return True, self.max_requests - window.count

    def _prune(self, now: float) -> None:
        stale = [key for key, window in self._windows.items() if window.reset_at < now - self.window_sec]
        for key in stale:
            del self._windows[key]

    def __len__(self) -> int:
        return len(self._windows)


def get_client_ip(request: Request) -> str:
    """X-Forwarded-For (первый адрес), затем X-Real-IP, затем адрес сокета."""

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    if request.client:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Отвечает 429, когда клиент исчерпал лимит окна."""

    def __init__(self, app, limiter: FixedWindowRateLimiter) -> None:
        super().__init__(app)
        self.limiter = limiter
        LOGGER.info(
            "Rate limiting enabled: %s requests per %s s",
            limiter.max_requests,
            limiter.window_sec,
        )

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api"):
            return await call_next(request)

        client_id = get_client_ip(request)
        allowed, remaining = self.limiter.hit(client_id)
        if not allowed:
            LOGGER.warning("Rate limit exceeded for %s on %s", client_id, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests"},
                headers={"Retry-After": str(int(self.limiter.window_sec))},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
