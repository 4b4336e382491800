"""Redis connection pool holding level acknowledgements and rate-limit windows."""

import redis.asyncio as redis
import structlog

logger = structlog.get_logger()

_pool: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    """Create the shared client. No connection is opened until first use."""
    global _pool  # noqa: PLW0603
    _pool = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )
    logger.info("redis_pool_created", max_connections=max_connections)


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool is None:
        return
    await _pool.aclose()
    _pool = None
    logger.info("redis_pool_closed")


def get_redis() -> redis.Redis:
    """Return the shared client; the rate limiter treats RuntimeError as "no Redis"."""
    if _pool is None:
        msg = "Redis pool is not initialized"
        raise RuntimeError(msg)
    return _pool
