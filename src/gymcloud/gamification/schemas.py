"""Pydantic request/response models for gamification endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from gymcloud.gamification.badges import BadgeMetric, BadgeStatus
from gymcloud.gamification.levels import (
    ClassContext,
    GenericContext,
    LevelProgress,
    LevelTier,
    PointsContext,
    RoutineContext,
)


# --- Levels ---


class LevelEntry(BaseModel):
    level: int
    min_points: int
    name: str
    icon: str
    color_class: str
    perks: list[str]

    @classmethod
    def from_tier(cls, tier: LevelTier) -> LevelEntry:
        return cls(
            level=tier.level,
            min_points=tier.min_points,
            name=tier.name,
            icon=tier.icon,
            color_class=tier.color_class,
            perks=list(tier.perks),
        )


class AllLevelsResponse(BaseModel):
    levels: list[LevelEntry]


class LevelProgressResponse(BaseModel):
    points: int
    level: LevelEntry
    progress_percent: int
    next_tier_threshold: int | None = None
    points_to_next: int | None = None

    @classmethod
    def from_progress(cls, progress: LevelProgress) -> LevelProgressResponse:
        return cls(
            points=progress.points,
            level=LevelEntry.from_tier(progress.tier),
            progress_percent=progress.progress_percent,
            next_tier_threshold=progress.next_tier_threshold,
            points_to_next=progress.points_to_next,
        )


# --- Multiplier ---


class ClassContextIn(BaseModel):
    type: Literal["class"]
    is_boosted_class: bool = False

    def to_context(self) -> PointsContext:
        return ClassContext(is_boosted_class=self.is_boosted_class)


class RoutineContextIn(BaseModel):
    type: Literal["routine"]

    def to_context(self) -> PointsContext:
        return RoutineContext()


class GenericContextIn(BaseModel):
    type: Literal["generic"]

    def to_context(self) -> PointsContext:
        return GenericContext()


PointsContextIn = Annotated[
    Union[ClassContextIn, RoutineContextIn, GenericContextIn],
    Field(discriminator="type"),
]


class MultiplierRequest(BaseModel):
    """Either ``level`` or ``points`` selects the tier."""

    level: int | None = None
    points: int | None = Field(default=None, ge=0)
    context: PointsContextIn

    @model_validator(mode="after")
    def _exactly_one_selector(self) -> MultiplierRequest:
        if (self.level is None) == (self.points is None):
            raise ValueError("Provide exactly one of 'level' or 'points'")
        return self


class MultiplierResponse(BaseModel):
    level: int
    multiplier: float


# --- Level-up acknowledgement ---


class LevelStatusResponse(BaseModel):
    last_acknowledged_level: int


class AcknowledgeLevelRequest(BaseModel):
    level: int = Field(ge=1)


class PendingLevelUpResponse(BaseModel):
    pending: bool
    level: LevelEntry | None = None
    last_acknowledged_level: int


# --- Badges ---


class BadgeStatusIn(BaseModel):
    badge_id: int
    code: str
    name: str
    description: str | None = None
    icon: str | None = None
    metric: BadgeMetric
    threshold: int = Field(ge=0)
    current_value: int = Field(ge=0)
    progress: float = Field(ge=0)
    earned: bool = False
    earned_at: datetime | None = None

    def to_status(self) -> BadgeStatus:
        return BadgeStatus(
            badge_id=self.badge_id,
            code=self.code,
            name=self.name,
            metric=self.metric,
            threshold=self.threshold,
            current_value=self.current_value,
            progress=self.progress,
            earned=self.earned,
            earned_at=self.earned_at,
            description=self.description,
            icon=self.icon,
        )


class BadgeView(BaseModel):
    badge_id: int
    code: str
    name: str
    description: str | None = None
    icon: str | None = None
    metric: BadgeMetric
    threshold: int
    current_value: int
    progress_percent: int
    unlocked: bool
    earned_at: datetime | None = None


class EvaluateBadgesRequest(BaseModel):
    badges: list[BadgeStatusIn]
    previously_unlocked: list[int] | None = None


class EvaluateBadgesResponse(BaseModel):
    unlocked: list[BadgeView]
    locked: list[BadgeView]
    newly_unlocked: BadgeView | None = None
    unlocked_count: int
    total: int
