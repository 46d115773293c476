"""Тесты ограничения частоты запросов."""

from __future__ import annotations

from conftest import make_app
from fastapi.testclient import TestClient

from nasboard.api.rate_limit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_limiter_blocks_after_max_requests() -> None:
    limiter = FixedWindowRateLimiter(max_requests=2, window_sec=60, clock=FakeClock())
    assert limiter.hit("10.0.0.1") == (True, 1)
    assert limiter.hit("10.0.0.1") == (True, 0)
    assert limiter.hit("10.0.0.1") == (False, 0)
    assert limiter.hit("10.0.0.2") == (True, 1)


def test_limiter_window_resets() -> None:
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=1, window_sec=60, clock=clock)
    assert limiter.hit("client")[0]
    assert not limiter.hit("client")[0]
    clock.now += 61
    assert limiter.hit("client")[0]


def test_middleware_returns_429(settings, tmp_path) -> None:
    settings.set_value("rate_limit", "max_requests", 2)
    client = TestClient(make_app(settings, tmp_path))

    first = client.get("/api/health")
    assert first.headers["X-RateLimit-Limit"] == "2"
    assert first.headers["X-RateLimit-Remaining"] == "1"
    client.get("/api/health")

    blocked = client.get("/api/health")
    assert blocked.status_code == 429
    assert blocked.json() == {"error": "Too many requests"}
    assert blocked.headers["Retry-After"] == "60"


def test_forwarded_clients_are_counted_separately(settings, tmp_path) -> None:
    settings.set_value("rate_limit", "max_requests", 1)
    client = TestClient(make_app(settings, tmp_path))
    assert client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.2, 10.0.0.9"}).status_code == 200
    assert client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429


def test_rate_limit_can_be_disabled(settings, tmp_path) -> None:
    settings.set_value("rate_limit", "enabled", False)
    settings.set_value("rate_limit", "max_requests", 1)
    client = TestClient(make_app(settings, tmp_path))
    assert all(client.get("/api/health").status_code == 200 for _ in range(3))
