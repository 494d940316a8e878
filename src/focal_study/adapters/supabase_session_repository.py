"""Supabase-backed focus session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from focal_study.domain.sessions import SessionRecord
from focal_study.services.sessions import SessionRepository

_COLUMNS = (
    "id, assignment_id, type, duration, start_time, end_time, completed, "
    "interrupted, actual_duration"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for focus sessions."""

    client: Client

    def add_session(self, user_id: str, session: SessionRecord) -> None:
        """Insert a session row."""
        response = (
            self.client.table("focus_sessions")
            .insert(
                {
                    "id": str(session.id),
                    "user_id": user_id,
                    "assignment_id": (
                        str(session.assignment_id) if session.assignment_id else None
                    ),
                    "type": session.type,
                    "duration": session.duration,
                    "start_time": session.start_time.isoformat(),
                    "end_time": None,
                    "completed": session.completed,
                    "interrupted": session.interrupted,
                    "actual_duration": session.actual_duration,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")

    def get_session(self, user_id: str, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("focus_sessions")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_sessions(self, user_id: str) -> list[SessionRecord]:
        """Return sessions ordered by start time."""
        response = (
            self.client.table("focus_sessions")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_sessions_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[SessionRecord]:
        """Return sessions started in the time range."""
        response = (
            self.client.table("focus_sessions")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .gte("start_time", start.isoformat())
            .lt("start_time", end.isoformat())
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def close_session(self, user_id: str, closed: SessionRecord) -> bool:
        """Conditionally close a session that still has no end time."""
        end_time = closed.end_time.isoformat() if closed.end_time else None
        response = (
            self.client.table("focus_sessions")
            .update(
                {
                    "end_time": end_time,
                    "completed": closed.completed,
                    "interrupted": closed.interrupted,
                    "actual_duration": closed.actual_duration,
                }
            )
            .eq("user_id", user_id)
            .eq("id", str(closed.id))
            .is_("end_time", "null")
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> SessionRecord:
    end_time_raw = row.get("end_time")
    assignment_raw = row.get("assignment_id")
    return SessionRecord(
        id=UUID(str(row["id"])),
        assignment_id=UUID(str(assignment_raw)) if assignment_raw else None,
        type=str(row.get("type") or "focus"),
        duration=int(row.get("duration") or 0),
        start_time=datetime.fromisoformat(str(row["start_time"])),
        end_time=(
            datetime.fromisoformat(end_time_raw)
            if isinstance(end_time_raw, str) and end_time_raw
            else None
        ),
        completed=bool(row.get("completed", False)),
        interrupted=bool(row.get("interrupted", False)),
        actual_duration=int(row.get("actual_duration") or 0),
    )
