"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator

import structlog
from redis.asyncio import Redis

from gymcloud.redis_client import get_redis as _get_redis


async def get_redis_dep() -> AsyncGenerator[Redis, None]:
    """Yield the Redis client as a FastAPI dependency."""
    yield _get_redis()


async def bind_user_context(user_id: str) -> str:
    """Bind the ``user_id`` path parameter into the structlog context."""
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id
