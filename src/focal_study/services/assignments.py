"""Assignment store with tier-gated capacity."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, tzinfo
from typing import Protocol
from uuid import UUID, uuid4

from focal_study.domain.assignments import PRIORITIES, PRIORITY_WEIGHTS, Assignment
from focal_study.domain.errors import (
    LimitExceededError,
    NotFoundError,
    ValidationError,
)
from focal_study.domain.plans import StudyPlan
from focal_study.domain.tiers import TierPolicy
from focal_study.services.planner import generate_study_plan

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = "medium"
DEFAULT_ESTIMATED_TIME = 60
_IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}
_MUTABLE_FIELDS = {
    "title",
    "description",
    "due_date",
    "priority",
    "estimated_time",
    "course",
    "completed",
}


class AssignmentRepository(Protocol):
    """Persistence interface for per-user assignment collections."""

    def add_assignment(self, user_id: str, assignment: Assignment) -> None:
        """Append an assignment to the user's collection."""

    def get_assignment(self, user_id: str, assignment_id: UUID) -> Assignment | None:
        """Return one of the user's assignments, if present."""

    def list_assignments(self, user_id: str) -> list[Assignment]:
        """Return the user's assignments in insertion order."""

    def count_assignments(self, user_id: str) -> int:
        """Return how many assignments the user has."""

    def replace_assignment(self, user_id: str, assignment: Assignment) -> None:
        """Replace a stored assignment with the same id."""

    def delete_assignment(self, user_id: str, assignment_id: UUID) -> bool:
        """Delete an assignment, returning False when it was absent."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AssignmentService:
    """Create, list, update and delete assignments; build study plans."""

    repository: AssignmentRepository
    timezone: tzinfo = UTC
    clock: Callable[[], datetime] = field(default=_utc_now)

    def create(
        self, user_id: str, tier: TierPolicy, fields: Mapping[str, object]
    ) -> Assignment:
        """Validate and store a new assignment for the user."""
        title = fields.get("title")
        due_date = fields.get("due_date")
        if not title or due_date is None:
            raise ValidationError("Title and due date are required")

        limit = tier.max_assignments
        if limit is not None and self.repository.count_assignments(user_id) >= limit:
            logger.info(
                "Assignment limit reached",
                extra={"user_id": user_id, "limit": limit},
            )
            raise LimitExceededError(
                "Assignment limit reached", limit=limit, requires_premium=True
            )

        now = self.clock()
        assignment = Assignment(
            id=uuid4(),
            title=_parse_title(title),
            description=_parse_text(fields.get("description"), "description"),
            due_date=_parse_datetime(due_date, self.timezone),
            priority=_parse_priority(fields.get("priority")),
            estimated_time=_parse_estimate(fields.get("estimated_time")),
            course=_parse_text(fields.get("course"), "course"),
            completed=_parse_bool(fields.get("completed"), "completed", False),
            created_at=now,
            updated_at=now,
        )
        self.repository.add_assignment(user_id, assignment)
        logger.info(
            "Assignment created",
            extra={"user_id": user_id, "assignment_id": str(assignment.id)},
        )
        return assignment

    def list_assignments(
        self,
        user_id: str,
        completed: bool | None = None,
        sort_by: str | None = "due_date",
    ) -> list[Assignment]:
        """Return a filtered, sorted snapshot of the user's assignments."""
        assignments = self.repository.list_assignments(user_id)
        if completed is not None:
            assignments = [item for item in assignments if item.completed == completed]
        return sort_assignments(assignments, sort_by)

    def get(self, user_id: str, assignment_id: UUID) -> Assignment:
        """Return an assignment or raise NotFoundError."""
        assignment = self.repository.get_assignment(user_id, assignment_id)
        if assignment is None:
            raise NotFoundError("assignment", assignment_id)
        return assignment

    def update(
        self, user_id: str, assignment_id: UUID, fields: Mapping[str, object]
    ) -> Assignment:
        """Merge supplied fields over the stored assignment.

        ``None`` values count as not supplied.
        """
        existing = self.get(user_id, assignment_id)
        changes: dict[str, object] = {}
        for key, value in fields.items():
            if key in _IMMUTABLE_FIELDS:
                continue
            if key not in _MUTABLE_FIELDS:
                logger.debug("Ignoring unknown assignment field %s", key)
                continue
            if value is None:
                continue
            changes[key] = self._coerce(key, value)
        updated = replace(existing, **changes, updated_at=self.clock())
        self.repository.replace_assignment(user_id, updated)
        return updated

    def delete(self, user_id: str, assignment_id: UUID) -> None:
        """Permanently remove an assignment."""
        if not self.repository.delete_assignment(user_id, assignment_id):
            raise NotFoundError("assignment", assignment_id)
        logger.info(
            "Assignment deleted",
            extra={"user_id": user_id, "assignment_id": str(assignment_id)},
        )

    def study_plan(self, user_id: str, tier: TierPolicy) -> StudyPlan:
        """Return the study plan over the user's outstanding assignments."""
        if not tier.study_plan:
            raise LimitExceededError(
                "Study plan is a premium feature", requires_premium=True
            )
        return generate_study_plan(
            self.repository.list_assignments(user_id), now=self.clock()
        )

    def _coerce(self, key: str, value: object) -> object:
        if key == "title":
            return _parse_title(value)
        if key == "due_date":
            return _parse_datetime(value, self.timezone)
        if key == "priority":
            return _parse_priority(value)
        if key == "estimated_time":
            return _parse_estimate(value)
        if key == "completed":
            return _parse_bool(value, key, False)
        return _parse_text(value, key)


def sort_assignments(
    assignments: list[Assignment], sort_by: str | None
) -> list[Assignment]:
    """Return assignments ordered by the requested key.

    Unknown keys keep insertion order.
    """
    if sort_by == "due_date":
        return sorted(assignments, key=lambda item: item.due_date)
    if sort_by == "priority":
        return sorted(
            assignments,
            key=lambda item: PRIORITY_WEIGHTS.get(item.priority, 0),
            reverse=True,
        )
    if sort_by == "created_at":
        return sorted(assignments, key=lambda item: item.created_at, reverse=True)
    return list(assignments)


def _parse_title(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Title must be non-empty text")
    return value


def _parse_text(value: object, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name.capitalize()} must be text")
    return value


def _parse_priority(value: object) -> str:
    if value is None or value == "":
        return DEFAULT_PRIORITY
    if value not in PRIORITIES:
        raise ValidationError(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return value


def _parse_estimate(value: object) -> int:
    if value is None:
        return DEFAULT_ESTIMATED_TIME
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError("Estimated time must be a number of minutes")
    minutes = int(value)
    if minutes <= 0 or minutes != value:
        raise ValidationError("Estimated time must be a positive whole number")
    return minutes


def _parse_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{name.capitalize()} must be true or false")
    return value


def _parse_datetime(value: object, tz: tzinfo) -> datetime:
    """Parse a datetime, date or ISO string; naive values use ``tz``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid due date: {value}") from exc
    else:
        raise ValidationError("Due date must be a date or ISO timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed
