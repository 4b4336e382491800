"""Workout endpoints: session summary with PR detection, history and progress."""

from __future__ import annotations

from fastapi import APIRouter

from gymcloud.workouts.performance import (
    ExerciseLog,
    SessionRecord,
    SetEntry,
    SetRecord,
    build_exercise_progress,
    group_sets_by_exercise,
    summarize_session,
)
from gymcloud.workouts.schemas import (
    BestSetOutput,
    ExerciseProgressRequest,
    ExerciseProgressResponse,
    ExerciseSummaryResponse,
    HistoryExerciseGroup,
    HistorySessionResponse,
    ProgressPointResponse,
    SessionHistoryRequest,
    SessionHistoryResponse,
    SessionRecordInput,
    SessionSummaryRequest,
    SessionSummaryResponse,
    SetOutput,
    SetRecordInput,
)

router = APIRouter(prefix="/api/v1/workouts", tags=["Workouts"])


def _to_session_record(session: SessionRecordInput) -> SessionRecord:
    return SessionRecord(
        session_id=session.id,
        created_at=session.created_at,
        status=session.status,
        notes=session.notes,
        sets=[
            SetRecord(
                exercise_id=p.exercise_id,
                set_number=p.set_number,
                weight=p.weight,
                reps=p.reps,
                exercise_name=p.exercise_name,
                comment=p.comment,
            )
            for p in session.performances
        ],
    )


@router.post("/summary", response_model=SessionSummaryResponse)
async def summarize(body: SessionSummaryRequest):
    """Summarize a logged session: status, best set per exercise, new PRs."""
    logs = [
        ExerciseLog(
            exercise_id=ex.exercise_id,
            sets=[(s.weight, s.reps) for s in ex.sets],
            comment=ex.comment,
        )
        for ex in body.exercises
    ]
    bests = {b.exercise_id: SetEntry(weight=b.weight, reps=b.reps) for b in body.best_performances}
    summary = summarize_session(logs, bests)

    return SessionSummaryResponse(
        status=summary.status,
        completed_exercises=summary.completed_exercises,
        total_exercises=summary.total_exercises,
        notes=body.notes or None,
        exercises=[
            ExerciseSummaryResponse(
                exercise_id=ex.exercise_id,
                sets=[SetOutput(weight=s.weight, reps=s.reps) for s in ex.sets],
                best=BestSetOutput(
                    one_rep_max=round(ex.best.one_rep_max, 1),
                    weight=ex.best.weight,
                    reps=ex.best.reps,
                ),
                is_personal_record=ex.is_personal_record,
                comment=ex.comment,
            )
            for ex in summary.exercises
        ],
    )


@router.post("/history", response_model=SessionHistoryResponse)
async def session_history(body: SessionHistoryRequest):
    """Group each session's sets by exercise for the history view."""
    sessions = []
    for session in body.sessions:
        record = _to_session_record(session)
        groups = group_sets_by_exercise(record.sets)
        sessions.append(
            HistorySessionResponse(
                id=record.session_id,
                created_at=record.created_at,
                status=record.status,
                notes=record.notes,
                exercises=[
                    HistoryExerciseGroup(
                        exercise_id=exercise_id,
                        exercise_name=sets[0].exercise_name,
                        comment=sets[0].comment,
                        sets=[
                            SetRecordInput(
                                exercise_id=s.exercise_id,
                                set_number=s.set_number,
                                weight=s.weight,
                                reps=s.reps,
                                exercise_name=s.exercise_name,
                                comment=s.comment,
                            )
                            for s in sets
                        ],
                    )
                    for exercise_id, sets in groups.items()
                ],
            )
        )
    return SessionHistoryResponse(sessions=sessions)


@router.post("/progress", response_model=ExerciseProgressResponse)
async def exercise_progress(body: ExerciseProgressRequest):
    """Per-session max weight and volume for one exercise, oldest first."""
    points = build_exercise_progress(
        [_to_session_record(s) for s in body.sessions],
        body.exercise_id,
    )
    return ExerciseProgressResponse(
        exercise_id=body.exercise_id,
        items=[
            ProgressPointResponse(
                date=p.date,
                max_weight=p.max_weight,
                total_volume=p.total_volume,
                sets=p.sets,
            )
            for p in points
        ],
    )
