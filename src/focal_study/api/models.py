"""Request and response models for the HTTP API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AssignmentPayload(CamelModel):
    """Assignment fields accepted on create and update."""

    title: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    priority: Literal["low", "medium", "high"] | None = None
    estimated_time: int | None = Field(default=None, gt=0)
    course: str | None = None
    completed: bool | None = None


class SessionStartPayload(CamelModel):
    """Body for starting a session."""

    assignment_id: UUID | None = None
    duration: int | None = None
    type: str | None = None


class SessionEndPayload(CamelModel):
    """Body for ending a session."""

    completed: bool | None = None
    interrupted: bool | None = None


class AssignmentOut(CamelModel):
    id: UUID
    title: str
    description: str
    due_date: datetime
    priority: str
    estimated_time: int
    course: str
    completed: bool
    created_at: datetime
    updated_at: datetime


class SessionOut(CamelModel):
    id: UUID
    assignment_id: UUID | None
    type: str
    duration: int
    start_time: datetime
    end_time: datetime | None
    completed: bool
    interrupted: bool
    actual_duration: int


class ActiveSessionOut(SessionOut):
    elapsed_minutes: int
    remaining_minutes: int


class StudyBlockOut(CamelModel):
    assignment_id: UUID
    title: str
    course: str
    due_date: datetime
    priority: str
    session_number: int
    total_sessions: int
    duration: int


class WeekdayProgressOut(CamelModel):
    day: str
    sessions: int
    minutes: int


class AssignmentFocusOut(CamelModel):
    assignment_id: UUID
    total_minutes: int
    session_count: int


class AnalyticsOut(CamelModel):
    """Flat analytics payload; premium fields are omitted when gated."""

    total_sessions: int
    completed_sessions: int
    total_minutes: int
    average_session_length: int
    productivity_score: int | None = None
    best_productivity_time: str | None = None
    streak_days: int | None = None
    weekly_progress: list[WeekdayProgressOut] | None = None
    focus_time_by_assignment: list[AssignmentFocusOut] | None = None
    message: str | None = None
    requires_premium: bool | None = None


class MessageCategoryOut(CamelModel):
    id: str
    name: str
    available: bool
    premium: bool
