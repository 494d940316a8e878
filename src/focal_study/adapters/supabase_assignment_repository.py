"""Supabase-backed assignment repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from focal_study.domain.assignments import Assignment
from focal_study.services.assignments import AssignmentRepository

_COLUMNS = (
    "id, title, description, due_date, priority, estimated_time, course, "
    "completed, created_at, updated_at"
)


@dataclass
class SupabaseAssignmentRepository(AssignmentRepository):
    """Supabase implementation for assignments."""

    client: Client

    def add_assignment(self, user_id: str, assignment: Assignment) -> None:
        """Insert an assignment row."""
        response = (
            self.client.table("assignments")
            .insert({"user_id": user_id, **_to_row(assignment)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create assignment")

    def get_assignment(self, user_id: str, assignment_id: UUID) -> Assignment | None:
        """Return an assignment by id, if present."""
        response = (
            self.client.table("assignments")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("id", str(assignment_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_assignments(self, user_id: str) -> list[Assignment]:
        """Return assignments in creation order."""
        response = (
            self.client.table("assignments")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def count_assignments(self, user_id: str) -> int:
        """Return how many assignments the user has."""
        response = (
            self.client.table("assignments")
            .select("id")
            .eq("user_id", user_id)
            .execute()
        )
        return len(response.data or [])

    def replace_assignment(self, user_id: str, assignment: Assignment) -> None:
        """Overwrite the mutable columns of an assignment row."""
        row = _to_row(assignment)
        row.pop("id")
        row.pop("created_at")
        self.client.table("assignments").update(row).eq("user_id", user_id).eq(
            "id", str(assignment.id)
        ).execute()

    def delete_assignment(self, user_id: str, assignment_id: UUID) -> bool:
        """Delete an assignment row."""
        response = (
            self.client.table("assignments")
            .delete()
            .eq("user_id", user_id)
            .eq("id", str(assignment_id))
            .execute()
        )
        return bool(response.data)


def _to_row(assignment: Assignment) -> dict[str, object]:
    return {
        "id": str(assignment.id),
        "title": assignment.title,
        "description": assignment.description,
        "due_date": assignment.due_date.isoformat(),
        "priority": assignment.priority,
        "estimated_time": assignment.estimated_time,
        "course": assignment.course,
        "completed": assignment.completed,
        "created_at": assignment.created_at.isoformat(),
        "updated_at": assignment.updated_at.isoformat(),
    }


def _parse_row(row: dict[str, object]) -> Assignment:
    return Assignment(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=str(row.get("description") or ""),
        due_date=datetime.fromisoformat(str(row["due_date"])),
        priority=str(row.get("priority") or "medium"),
        estimated_time=int(row.get("estimated_time") or 60),
        course=str(row.get("course") or ""),
        completed=bool(row.get("completed", False)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
