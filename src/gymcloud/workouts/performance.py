"""Workout session aggregation: estimated 1RM, personal records, progress series."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SessionStatus(Enum):
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    NOT_DONE = "NOT_DONE"


@dataclass(frozen=True)
class SetEntry:
    weight: float
    reps: int


@dataclass(frozen=True)
class BestSet:
    one_rep_max: float
    weight: float
    reps: int


@dataclass(frozen=True)
class ExerciseLog:
    """Sets entered for one exercise. Blank fields are None."""

    exercise_id: int
    sets: Sequence[tuple[float | None, int | None]]
    comment: str | None = None


@dataclass(frozen=True)
class ExerciseSummary:
    exercise_id: int
    sets: list[SetEntry]
    best: BestSet
    is_personal_record: bool
    comment: str | None = None


@dataclass(frozen=True)
class SessionSummary:
    status: SessionStatus
    completed_exercises: int
    total_exercises: int
    exercises: list[ExerciseSummary] = field(default_factory=list)


@dataclass(frozen=True)
class SetRecord:
    """A stored set belonging to a finished session."""

    exercise_id: int
    set_number: int
    weight: float
    reps: int
    exercise_name: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class SessionRecord:
    session_id: int
    created_at: datetime
    status: SessionStatus
    sets: Sequence[SetRecord]
    notes: str | None = None


@dataclass(frozen=True)
class ProgressPoint:
    date: datetime
    max_weight: float
    total_volume: float
    sets: int


_NO_BEST = BestSet(one_rep_max=0.0, weight=0.0, reps=0)


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate: weight * (1 + reps / 30). Zero if either input is zero."""
    if not weight or not reps:
        return 0.0
    return weight * (1 + reps / 30)


def best_set(sets: Iterable[SetEntry]) -> BestSet:
    """Set with the highest estimated 1RM. Earlier sets win ties."""
    best = _NO_BEST
    for entry in sets:
        rm = estimate_one_rep_max(entry.weight, entry.reps)
        if rm > best.one_rep_max:
            best = BestSet(one_rep_max=rm, weight=entry.weight, reps=entry.reps)
    return best


def is_personal_record(sets: Iterable[SetEntry], previous_best: SetEntry | None) -> bool:
    """True if today's best estimated 1RM beats the previous best."""
    previous_rm = estimate_one_rep_max(previous_best.weight, previous_best.reps) if previous_best else 0.0
    today = best_set(sets)
    return today.one_rep_max > 0 and today.one_rep_max > previous_rm


def derive_session_status(completed_exercises: int, total_exercises: int) -> SessionStatus:
    if completed_exercises == 0:
        return SessionStatus.NOT_DONE
    if completed_exercises >= total_exercises:
        return SessionStatus.COMPLETED
    return SessionStatus.PARTIAL


def summarize_session(
    exercises: Sequence[ExerciseLog],
    best_performances: Mapping[int, SetEntry] | None = None,
) -> SessionSummary:
    """Reduce a logged session to the sets actually performed.

    Sets missing weight or reps are dropped, then exercises left without sets.
    The status compares exercises with sets against exercises planned.
    """
    best_performances = best_performances or {}
    summaries: list[ExerciseSummary] = []

    for log in exercises:
        sets = [
            SetEntry(weight=float(weight), reps=int(reps))
            for weight, reps in log.sets
            if weight is not None and reps is not None
        ]
        if not sets:
            continue
        summaries.append(
            ExerciseSummary(
                exercise_id=log.exercise_id,
                sets=sets,
                best=best_set(sets),
                is_personal_record=is_personal_record(sets, best_performances.get(log.exercise_id)),
                comment=log.comment or None,
            )
        )

    return SessionSummary(
        status=derive_session_status(len(summaries), len(exercises)),
        completed_exercises=len(summaries),
        total_exercises=len(exercises),
        exercises=summaries,
    )


def group_sets_by_exercise(records: Iterable[SetRecord]) -> dict[int, list[SetRecord]]:
    """Group set records by exercise id, in first-seen order."""
    grouped: dict[int, list[SetRecord]] = {}
    for record in records:
        grouped.setdefault(record.exercise_id, []).append(record)
    return grouped


def build_exercise_progress(sessions: Iterable[SessionRecord], exercise_id: int) -> list[ProgressPoint]:
    """One point per session that trained ``exercise_id``, oldest first."""
    points: list[ProgressPoint] = []
    for session in sessions:
        sets = [s for s in session.sets if s.exercise_id == exercise_id]
        if not sets:
            continue
        points.append(
            ProgressPoint(
                date=session.created_at,
                max_weight=max(s.weight for s in sets),
                total_volume=sum(s.weight * s.reps for s in sets),
                sets=len(sets),
            )
        )
    points.sort(key=lambda p: p.date)
    return points
