"""Gamification API endpoints: levels, multipliers, level-ups and badges."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from redis.asyncio import Redis

from gymcloud.config import get_settings
from gymcloud.dependencies import bind_user_context, get_redis_dep
from gymcloud.gamification.badges import (
    BadgeStatus,
    badge_progress_percent,
    find_newly_unlocked,
    is_unlocked,
    partition_badges,
)
from gymcloud.gamification.level_status import (
    acknowledge_level,
    detect_level_up,
    get_last_acknowledged_level,
)
from gymcloud.gamification.levels import LEVELS, get_tier, resolve_level, resolve_multiplier
from gymcloud.gamification.schemas import (
    AcknowledgeLevelRequest,
    AllLevelsResponse,
    BadgeView,
    EvaluateBadgesRequest,
    EvaluateBadgesResponse,
    LevelEntry,
    LevelProgressResponse,
    LevelStatusResponse,
    MultiplierRequest,
    MultiplierResponse,
    PendingLevelUpResponse,
)

router = APIRouter(prefix="/api/v1", tags=["Gamification"])


# ── Levels ──


@router.get("/levels", response_model=AllLevelsResponse)
async def list_levels():
    """Get all level definitions."""
    return AllLevelsResponse(levels=[LevelEntry.from_tier(t) for t in LEVELS])


@router.get("/levels/resolve", response_model=LevelProgressResponse)
async def resolve_points(points: int = Query(..., ge=0)):
    """Resolve the level and progress for a point total."""
    return LevelProgressResponse.from_progress(resolve_level(points))


@router.post("/levels/multiplier", response_model=MultiplierResponse)
async def get_multiplier(body: MultiplierRequest):
    """Point multiplier for an activity at a given level (or point total)."""
    if body.level is not None:
        try:
            tier = get_tier(body.level)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail="Level not found") from exc
    else:
        tier = resolve_level(body.points).tier

    return MultiplierResponse(
        level=tier.level,
        multiplier=resolve_multiplier(tier, body.context.to_context()),
    )


# ── Level-up acknowledgement ──


@router.get(
    "/users/{user_id}/level-status",
    response_model=LevelStatusResponse,
    dependencies=[Depends(bind_user_context)],
)
async def get_level_status(user_id: str, redis: Redis = Depends(get_redis_dep)):  # noqa: B008
    """Last level the user has been congratulated for."""
    level = await get_last_acknowledged_level(redis, user_id)
    return LevelStatusResponse(last_acknowledged_level=level)


@router.put(
    "/users/{user_id}/acknowledge-level",
    status_code=204,
    dependencies=[Depends(bind_user_context)],
)
async def put_acknowledge_level(
    user_id: str,
    body: AcknowledgeLevelRequest,
    redis: Redis = Depends(get_redis_dep),  # noqa: B008
):
    """Mark the level-up for ``body.level`` as seen."""
    ttl_seconds = get_settings().level_status_ttl_days * 86400
    try:
        await acknowledge_level(redis, user_id, body.level, ttl_seconds=ttl_seconds)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return Response(status_code=204)


@router.get(
    "/users/{user_id}/level-up",
    response_model=PendingLevelUpResponse,
    dependencies=[Depends(bind_user_context)],
)
async def get_pending_level_up(
    user_id: str,
    points: int = Query(..., ge=0),
    redis: Redis = Depends(get_redis_dep),  # noqa: B008
):
    """Whether the user reached a level they have not been shown yet."""
    last_level = await get_last_acknowledged_level(redis, user_id)
    tier = detect_level_up(points, last_level)
    return PendingLevelUpResponse(
        pending=tier is not None,
        level=LevelEntry.from_tier(tier) if tier else None,
        last_acknowledged_level=last_level,
    )


# ── Badges ──


def _badge_view(badge: BadgeStatus) -> BadgeView:
    return BadgeView(
        badge_id=badge.badge_id,
        code=badge.code,
        name=badge.name,
        description=badge.description,
        icon=badge.icon,
        metric=badge.metric,
        threshold=badge.threshold,
        current_value=badge.current_value,
        progress_percent=badge_progress_percent(badge),
        unlocked=is_unlocked(badge),
        earned_at=badge.earned_at,
    )


@router.post("/badges/evaluate", response_model=EvaluateBadgesResponse)
async def evaluate_badges(body: EvaluateBadgesRequest):
    """Split badges into unlocked/locked and report one newly unlocked badge."""
    badges = [b.to_status() for b in body.badges]
    unlocked, locked = partition_badges(badges)
    newly = find_newly_unlocked(body.previously_unlocked, badges)

    return EvaluateBadgesResponse(
        unlocked=[_badge_view(b) for b in unlocked],
        locked=[_badge_view(b) for b in locked],
        newly_unlocked=_badge_view(newly) if newly else None,
        unlocked_count=len(unlocked),
        total=len(badges),
    )
