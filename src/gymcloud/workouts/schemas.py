"""Pydantic request/response models for workout endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from gymcloud.workouts.performance import SessionStatus


# --- Session summary ---


class SetInput(BaseModel):
    """One logged set. Either field may be left blank (null)."""

    weight: float | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=1)


class ExerciseInput(BaseModel):
    exercise_id: int
    sets: list[SetInput] = Field(min_length=1)
    comment: str | None = None


class BestPerformanceInput(BaseModel):
    exercise_id: int
    weight: float = Field(ge=0)
    reps: int = Field(ge=0)


class SessionSummaryRequest(BaseModel):
    exercises: list[ExerciseInput]
    best_performances: list[BestPerformanceInput] = []
    notes: str | None = None


class SetOutput(BaseModel):
    weight: float
    reps: int


class BestSetOutput(BaseModel):
    one_rep_max: float
    weight: float
    reps: int


class ExerciseSummaryResponse(BaseModel):
    exercise_id: int
    sets: list[SetOutput]
    best: BestSetOutput
    is_personal_record: bool
    comment: str | None = None


class SessionSummaryResponse(BaseModel):
    status: SessionStatus
    completed_exercises: int
    total_exercises: int
    exercises: list[ExerciseSummaryResponse]
    notes: str | None = None


# --- History / progress ---


class SetRecordInput(BaseModel):
    exercise_id: int
    set_number: int = Field(ge=1)
    weight: float = Field(ge=0)
    reps: int = Field(ge=1)
    exercise_name: str | None = None
    comment: str | None = None


class SessionRecordInput(BaseModel):
    id: int
    created_at: datetime
    status: SessionStatus
    notes: str | None = None
    performances: list[SetRecordInput] = []


class ExerciseProgressRequest(BaseModel):
    exercise_id: int
    sessions: list[SessionRecordInput]


class ProgressPointResponse(BaseModel):
    date: datetime
    max_weight: float
    total_volume: float
    sets: int


class ExerciseProgressResponse(BaseModel):
    exercise_id: int
    items: list[ProgressPointResponse]


class SessionHistoryRequest(BaseModel):
    sessions: list[SessionRecordInput]


class HistoryExerciseGroup(BaseModel):
    exercise_id: int
    exercise_name: str | None = None
    sets: list[SetRecordInput]
    comment: str | None = None


class HistorySessionResponse(BaseModel):
    id: int
    created_at: datetime
    status: SessionStatus
    notes: str | None = None
    exercises: list[HistoryExerciseGroup]


class SessionHistoryResponse(BaseModel):
    sessions: list[HistorySessionResponse]
