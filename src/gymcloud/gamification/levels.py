"""Level tiers, progress-to-next-level and point multipliers.

The tier catalog is static and ordered by ascending ``min_points``; the first
tier starts at 0. Everything in this module is pure: the point total itself is
owned by the scoring backend and only re-read here for presentation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LevelTier:
    level: int
    min_points: int
    name: str
    icon: str
    color_class: str
    perks: tuple[str, ...]


LEVELS: tuple[LevelTier, ...] = (
    LevelTier(
        level=1,
        min_points=0,
        name="Calentando motores",
        icon="\U0001f525",
        color_class="bg-slate-700 text-white",
        perks=(
            "Acceso al sistema de puntos y experiencia",
            "Seguimiento básico del progreso",
            "Visualización del perfil gamificado",
        ),
    ),
    LevelTier(
        level=2,
        min_points=20,
        name="Entrenando en serio",
        icon="\U0001f4aa",
        color_class="bg-emerald-600 text-white",
        perks=("Multiplicador de puntos +5% en clases seleccionadas",),
    ),
    LevelTier(
        level=3,
        min_points=60,
        name="Modo atleta",
        icon="\U0001f3c6",
        color_class="bg-yellow-500 text-black",
        perks=(
            "Acceso a desafíos especiales",
            "Multiplicador de puntos +10% en rutinas completas",
        ),
    ),
    LevelTier(
        level=4,
        min_points=120,
        name="Leyenda del Gym",
        icon="⚡",
        color_class="bg-purple-600 text-white",
        perks=(
            "Acceso a desafíos especiales",
            "Multiplicador de puntos +20% en toda la actividad",
            "Perfil de progreso destacado",
            "Mascota de entrenamiento virtual",
        ),
    ),
    LevelTier(
        level=5,
        min_points=100000,
        name="Élite GymCloud",
        icon="\U0001f451",
        color_class="bg-rose-600 text-white",
        perks=(
            "Acceso a desafíos especiales",
            "Multiplicador de puntos +30% en toda la actividad",
            "Perfil de progreso destacado",
            "Mascota de entrenamiento virtual",
        ),
    ),
)


@dataclass(frozen=True)
class LevelProgress:
    points: int
    tier: LevelTier
    progress_percent: int
    next_tier_threshold: int | None

    @property
    def points_to_next(self) -> int | None:
        if self.next_tier_threshold is None:
            return None
        return max(0, self.next_tier_threshold - self.points)


# ── Points contexts ──


@dataclass(frozen=True)
class ClassContext:
    """Points earned by attending a class."""

    is_boosted_class: bool = False


@dataclass(frozen=True)
class RoutineContext:
    """Points earned by completing a full routine."""


@dataclass(frozen=True)
class GenericContext:
    """Any other activity."""


PointsContext = ClassContext | RoutineContext | GenericContext


def sanitize_points(points: float | int | None) -> int:
    """Floor a raw point total to a non-negative integer.

    Negative, NaN, infinite and missing totals all become 0.
    """
    if points is None:
        return 0
    if isinstance(points, float) and not math.isfinite(points):
        return 0
    if points <= 0:
        return 0
    return int(math.floor(points))


def get_tier(level: int) -> LevelTier:
    """Look up a tier by its level number. Raises ValueError if unknown."""
    for tier in LEVELS:
        if tier.level == level:
            return tier
    raise ValueError(f"Unknown level: {level}")


def _round_half_up(numerator: int, denominator: int) -> int:
    # Exact integer rounding of numerator / denominator, halves go up.
    return (2 * numerator + denominator) // (2 * denominator)


def resolve_level(points: float | int | None) -> LevelProgress:
    """Resolve the tier for a point total and the progress toward the next one.

    The selected tier is the highest one whose ``min_points`` does not exceed
    the total. At the top tier the progress saturates at 100 and there is no
    next threshold.
    """
    total = sanitize_points(points)

    index = 0
    for i in range(len(LEVELS) - 1, -1, -1):
        if LEVELS[i].min_points <= total:
            index = i
            break

    tier = LEVELS[index]
    if index + 1 >= len(LEVELS):
        return LevelProgress(
            points=total,
            tier=tier,
            progress_percent=100,
            next_tier_threshold=None,
        )

    next_threshold = LEVELS[index + 1].min_points
    span = next_threshold - tier.min_points
    percent = _round_half_up(100 * (total - tier.min_points), span)

    return LevelProgress(
        points=total,
        tier=tier,
        progress_percent=min(100, max(0, percent)),
        next_tier_threshold=next_threshold,
    )


def resolve_multiplier(tier: LevelTier, context: PointsContext) -> float:
    """Point multiplier for an activity, by tier level and activity context.

    Level 5: +30% on everything. Level 4: +20% on everything.
    Level 3: +10% on completed routines. Level 2: +5% on boosted classes.
    """
    bonus = 0.0

    if tier.level == 5:
        bonus = 0.30
    elif tier.level == 4:
        bonus = 0.20
    elif tier.level == 3:
        if isinstance(context, RoutineContext):
            bonus = 0.10
    elif tier.level == 2:
        if isinstance(context, ClassContext) and context.is_boosted_class:
            bonus = 0.05

    return round(1.0 + bonus, 2)
