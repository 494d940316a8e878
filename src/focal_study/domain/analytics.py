"""Domain models for session analytics."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class BasicStats:
    """Session totals available on every tier."""

    total_sessions: int
    completed_sessions: int
    total_minutes: int
    average_session_length: int


@dataclass(frozen=True)
class WeekdayProgress:
    """Session count and minutes for one weekday."""

    day: str
    sessions: int
    minutes: int


@dataclass(frozen=True)
class AssignmentFocus:
    """Focus time spent on one assignment."""

    assignment_id: UUID
    total_minutes: int
    session_count: int


@dataclass(frozen=True)
class AnalyticsReport:
    """Analytics for a period; premium fields are None on gated tiers."""

    basic: BasicStats
    productivity_score: int | None = None
    best_productivity_time: str | None = None
    streak_days: int | None = None
    weekly_progress: list[WeekdayProgress] | None = None
    focus_time_by_assignment: list[AssignmentFocus] | None = None
    requires_premium: bool = False
    message: str | None = None
