"""Domain models for generated study plans."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class StudyBlock:
    """A single bounded study interval for one assignment."""

    assignment_id: UUID
    title: str
    course: str
    due_date: datetime
    priority: str
    session_number: int
    total_sessions: int
    duration: int


@dataclass(frozen=True)
class StudyPlan:
    """Ordered study blocks with their planned total."""

    blocks: list[StudyBlock] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(block.duration for block in self.blocks)

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60
