"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gymcloud.config import get_settings
from gymcloud.dependencies import get_redis_dep
from gymcloud.gamification.level_status import LEVEL_ACK_SCRIPT
from gymcloud.main import create_app


class FakePipeline:
    """Queues commands and runs them against a FakeRedis on execute()."""

    def __init__(self, redis: FakeRedis) -> None:
        self._redis = redis
        self._ops: list[tuple[str, tuple[Any, ...]]] = []

    def incr(self, key: str) -> FakePipeline:
        self._ops.append(("incr", (key,)))
        return self

    def expire(self, key: str, seconds: int) -> FakePipeline:
        self._ops.append(("expire", (key, seconds)))
        return self

    async def execute(self) -> list[Any]:
        results = [await getattr(self._redis, name)(*args) for name, args in self._ops]
        self._ops = []
        return results


def _run_level_ack(redis: FakeRedis, keys: list[str], args: list[Any]) -> int:
    """Python rendition of LEVEL_ACK_SCRIPT; runs without yielding."""
    key = keys[0]
    level, ttl = int(args[0]), int(args[1])
    try:
        current = int(redis.data.get(key, 0))
    except ValueError:
        current = 0
    if level > current:
        redis.data[key] = str(level)
        if ttl > 0:
            redis.ttls[key] = ttl
        return level
    if ttl > 0 and key in redis.data:
        redis.ttls[key] = ttl
    return current


_SCRIPTS: dict[str, Callable[[FakeRedis, list[str], list[Any]], Any]] = {
    LEVEL_ACK_SCRIPT: _run_level_ack,
}


class FakeScript:
    """A registered script: one round trip, then an atomic body."""

    def __init__(self, redis: FakeRedis, script: str) -> None:
        self._redis = redis
        self._body = _SCRIPTS[script]

    async def __call__(self, keys: list[str] | None = None, args: list[Any] | None = None) -> Any:
        await asyncio.sleep(0)
        return self._body(self._redis, keys or [], args or [])


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the API uses."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> str | None:
        value = self.data.get(key)
        await asyncio.sleep(0)  # network round trip
        return value

    async def set(self, key: str, value: Any, ex: int | None = None) -> bool:
        self.data[key] = str(value)
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if k in self.data)

    async def incr(self, key: str) -> int:
        value = int(self.data.get(key, 0)) + 1
        self.data[key] = str(value)
        return value

    async def expire(self, key: str, seconds: int) -> bool:
        self.ttls[key] = seconds
        return key in self.data

    async def ping(self) -> bool:
        return True

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)

    def register_script(self, script: str) -> FakeScript:
        return FakeScript(self, script)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def client(fake_redis: FakeRedis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the app with Redis swapped for an in-memory fake."""
    get_settings.cache_clear()
    monkeypatch.setattr("gymcloud.redis_client._pool", fake_redis)

    app = create_app()
    app.dependency_overrides[get_redis_dep] = lambda: fake_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client_without_redis() -> AsyncGenerator[AsyncClient, None]:
    """Client whose Redis pool was never initialized."""
    get_settings.cache_clear()
    app = create_app()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
