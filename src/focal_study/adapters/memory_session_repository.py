"""Process-lifetime session repository."""

from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from uuid import UUID

from focal_study.domain.sessions import SessionRecord
from focal_study.services.sessions import SessionRepository


@dataclass
class InMemorySessionRepository(SessionRepository):
    """Keeps sessions in a dict keyed by user id; nothing survives restarts."""

    sessions: dict[str, list[SessionRecord]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def add_session(self, user_id: str, session: SessionRecord) -> None:
        with self._lock:
            self.sessions.setdefault(user_id, []).append(session)

    def get_session(self, user_id: str, session_id: UUID) -> SessionRecord | None:
        with self._lock:
            for session in self.sessions.get(user_id, []):
                if session.id == session_id:
                    return session
        return None

    def list_sessions(self, user_id: str) -> list[SessionRecord]:
        with self._lock:
            return list(self.sessions.get(user_id, []))

    def list_sessions_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[SessionRecord]:
        with self._lock:
            return [
                session
                for session in self.sessions.get(user_id, [])
                if start <= session.start_time < end
            ]

    def close_session(self, user_id: str, closed: SessionRecord) -> bool:
        # Check-and-set under the lock so only one caller terminates a session.
        with self._lock:
            stored = self.sessions.get(user_id, [])
            for index, existing in enumerate(stored):
                if existing.id != closed.id:
                    continue
                if not existing.is_open:
                    return False
                stored[index] = closed
                return True
        return False
