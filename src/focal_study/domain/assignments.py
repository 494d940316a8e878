"""Domain models for study assignments."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

PRIORITIES = ("low", "medium", "high")
PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class Assignment:
    """Represents an assignment owned by a single user."""

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
