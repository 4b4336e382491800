"""Level-up detection and acknowledgement storage.

A user is congratulated once per tier. The highest tier level already shown
to the user is kept in Redis; a level-up is pending whenever the tier resolved
from the current point total is above it.
"""

from __future__ import annotations

import structlog
from redis.asyncio import Redis

from gymcloud.gamification.levels import LevelTier, get_tier, resolve_level

logger = structlog.get_logger()

DEFAULT_ACKNOWLEDGED_LEVEL = 1

# Compare-and-set on the server so concurrent acknowledgements cannot lower
# the stored level. A repeat acknowledgement only renews the expiry.
# KEYS[1] = ack key, ARGV[1] = level, ARGV[2] = ttl seconds (0 = none)
LEVEL_ACK_SCRIPT = """
local current = tonumber(redis.call('GET', KEYS[1])) or 0
local level = tonumber(ARGV[1])
local ttl = tonumber(ARGV[2])
if level > current then
    if ttl > 0 then
        redis.call('SET', KEYS[1], level, 'EX', ttl)
    else
        redis.call('SET', KEYS[1], level)
    end
    return level
end
if ttl > 0 then
    redis.call('EXPIRE', KEYS[1], ttl)
end
return current
"""


def build_level_ack_key(user_id: str) -> str:
    """Build the Redis key holding a user's last acknowledged level."""
    return f"gamification:level_ack:{user_id}"


def detect_level_up(points: float | int | None, last_acknowledged_level: int) -> LevelTier | None:
    """Return the newly reached tier, or None if there is nothing to celebrate.

    The first tier is never celebrated.
    """
    tier = resolve_level(points).tier
    if tier.level > 1 and tier.level > last_acknowledged_level:
        return tier
    return None


async def get_last_acknowledged_level(redis: Redis, user_id: str) -> int:
    """Read the last acknowledged level, defaulting to the first tier."""
    raw = await redis.get(build_level_ack_key(user_id))
    if raw is None:
        return DEFAULT_ACKNOWLEDGED_LEVEL
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("level_ack_corrupt", user_id=user_id, raw=raw)
        return DEFAULT_ACKNOWLEDGED_LEVEL


async def acknowledge_level(
    redis: Redis,
    user_id: str,
    level: int,
    ttl_seconds: int = 0,
) -> int:
    """Record that the user has seen the level-up for ``level``.

    The stored value never decreases; with a TTL every acknowledgement renews
    the expiry. Returns the level stored afterwards.
    Raises ValueError if ``level`` is not in the tier catalog.
    """
    get_tier(level)

    script = redis.register_script(LEVEL_ACK_SCRIPT)
    stored = int(
        await script(
            keys=[build_level_ack_key(user_id)],
            args=[level, max(0, ttl_seconds)],
        )
    )

    logger.info("level_acknowledged", level=level, stored_level=stored)
    return stored
