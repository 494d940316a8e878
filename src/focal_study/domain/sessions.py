"""Domain models for focus sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

SESSION_TYPES = ("focus", "break", "long-break")


@dataclass(frozen=True)
class SessionRecord:
    """Represents a timed focus or break session."""

    id: UUID
    assignment_id: UUID | None
    type: str
    duration: int
    start_time: datetime
    end_time: datetime | None = None
    completed: bool = False
    interrupted: bool = False
    actual_duration: int = 0

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class ActiveSession:
    """An open session with its live timing."""

    session: SessionRecord
    elapsed_minutes: int
    remaining_minutes: int
