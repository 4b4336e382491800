"""Badge unlock evaluation over status records fetched from the scoring backend."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BadgeMetric(Enum):
    TOTAL_POINTS = "TOTAL_POINTS"
    CLASS_ENROLL_COUNT = "CLASS_ENROLL_COUNT"
    ROUTINE_COMPLETE_COUNT = "ROUTINE_COMPLETE_COUNT"


@dataclass(frozen=True)
class BadgeStatus:
    """A user's standing on one badge."""

    badge_id: int
    code: str
    name: str
    metric: BadgeMetric
    threshold: int
    current_value: int
    progress: float  # 0-1
    earned: bool = False
    earned_at: datetime | None = None
    description: str | None = None
    icon: str | None = None


def is_unlocked(badge: BadgeStatus) -> bool:
    """A badge counts as unlocked once earned or once its metric reached the threshold."""
    return badge.earned or badge.progress >= 1 or badge.current_value >= badge.threshold


def badge_progress_percent(badge: BadgeStatus) -> int:
    percent = int(badge.progress * 100 + 0.5) if badge.progress > 0 else 0
    return min(100, max(0, percent))


def partition_badges(badges: Iterable[BadgeStatus]) -> tuple[list[BadgeStatus], list[BadgeStatus]]:
    """Split badges into (unlocked, locked), keeping input order."""
    unlocked: list[BadgeStatus] = []
    locked: list[BadgeStatus] = []
    for badge in badges:
        (unlocked if is_unlocked(badge) else locked).append(badge)
    return unlocked, locked


def find_newly_unlocked(
    previous_ids: Iterable[int] | None,
    badges: Sequence[BadgeStatus],
) -> BadgeStatus | None:
    """Return the first badge unlocked now that was not unlocked before.

    ``previous_ids`` of None means this is the first observation: it only sets
    the baseline, so nothing is reported.
    """
    if previous_ids is None:
        return None
    seen = set(previous_ids)
    for badge in badges:
        if is_unlocked(badge) and badge.badge_id not in seen:
            return badge
    return None
