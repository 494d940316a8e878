"""Focus session store with daily limits and analytics."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Protocol
from uuid import UUID, uuid4

from focal_study.domain.analytics import AnalyticsReport
from focal_study.domain.errors import (
    AlreadyTerminatedError,
    LimitExceededError,
    NotFoundError,
    ValidationError,
)
from focal_study.domain.sessions import SESSION_TYPES, ActiveSession, SessionRecord
from focal_study.domain.tiers import TierPolicy
from focal_study.services.analytics import build_report, filter_by_period

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for per-user session collections."""

    def add_session(self, user_id: str, session: SessionRecord) -> None:
        """Append a session to the user's collection."""

    def get_session(self, user_id: str, session_id: UUID) -> SessionRecord | None:
        """Return one of the user's sessions, if present."""

    def list_sessions(self, user_id: str) -> list[SessionRecord]:
        """Return the user's sessions in chronological order."""

    def list_sessions_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[SessionRecord]:
        """Return sessions with start_time in [start, end)."""

    def close_session(self, user_id: str, closed: SessionRecord) -> bool:
        """Store a terminated session only if the stored one is still open.

        Returns False when the session was already terminated.
        """


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionService:
    """Start, end and query timed sessions."""

    repository: SessionRepository
    timezone: tzinfo = UTC
    clock: Callable[[], datetime] = field(default=_utc_now)

    def start(  # noqa: PLR0913
        self,
        user_id: str,
        tier: TierPolicy,
        assignment_id: UUID | None = None,
        duration: int | None = None,
        session_type: str | None = None,
    ) -> SessionRecord:
        """Open a new session after checking the tier's limits."""
        now = self.clock()
        daily_limit = tier.max_daily_sessions
        if daily_limit is not None:
            today = self._today_sessions(user_id, now)
            if len(today) >= daily_limit:
                logger.info(
                    "Daily session limit reached",
                    extra={"user_id": user_id, "limit": daily_limit},
                )
                raise LimitExceededError(
                    "Daily session limit reached",
                    limit=daily_limit,
                    requires_premium=True,
                )

        if duration is not None and duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        kind = session_type or "focus"
        if kind not in SESSION_TYPES:
            raise ValidationError(f"Unknown session type: {kind}")

        session_duration = tier.default_session_minutes
        if duration and duration != tier.default_session_minutes:
            if not tier.custom_session_duration:
                raise LimitExceededError(
                    "Custom duration is a premium feature", requires_premium=True
                )
            session_duration = duration

        session = SessionRecord(
            id=uuid4(),
            assignment_id=assignment_id,
            type=kind,
            duration=session_duration,
            start_time=now,
        )
        self.repository.add_session(user_id, session)
        logger.info(
            "Session started",
            extra={"user_id": user_id, "session_id": str(session.id)},
        )
        return session

    def end(
        self,
        user_id: str,
        session_id: UUID,
        completed: bool | None = None,
        interrupted: bool | None = None,
    ) -> SessionRecord:
        """Terminate an open session exactly once."""
        session = self.repository.get_session(user_id, session_id)
        if session is None:
            raise NotFoundError("session", session_id)
        if not session.is_open:
            raise AlreadyTerminatedError(session_id)

        end_time = self.clock()
        elapsed = (end_time - session.start_time).total_seconds() / 60
        closed = replace(
            session,
            end_time=end_time,
            completed=True if completed is None else completed,
            interrupted=bool(interrupted),
            actual_duration=round(elapsed),
        )
        if not self.repository.close_session(user_id, closed):
            raise AlreadyTerminatedError(session_id)
        logger.info(
            "Session ended",
            extra={"user_id": user_id, "session_id": str(session_id)},
        )
        return closed

    def history(  # noqa: PLR0913
        self,
        user_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        assignment_id: UUID | None = None,
        limit: int | None = None,
    ) -> list[SessionRecord]:
        """Return matching sessions, keeping the most recent ``limit``."""
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be a positive number")
        sessions = self.repository.list_sessions(user_id)
        if start_date is not None:
            start = _aware(start_date, self.timezone)
            sessions = [item for item in sessions if item.start_time >= start]
        if end_date is not None:
            end = _aware(end_date, self.timezone)
            sessions = [item for item in sessions if item.start_time <= end]
        if assignment_id is not None:
            sessions = [
                item for item in sessions if item.assignment_id == assignment_id
            ]
        if limit is not None:
            sessions = sessions[-limit:]
        return sessions

    def active(self, user_id: str) -> ActiveSession | None:
        """Return the first open session with its live timing, if any."""
        session = next(
            (item for item in self.repository.list_sessions(user_id) if item.is_open),
            None,
        )
        if session is None:
            return None
        elapsed = (self.clock() - session.start_time).total_seconds() / 60
        return ActiveSession(
            session=session,
            elapsed_minutes=round(elapsed),
            remaining_minutes=max(0, round(session.duration - elapsed)),
        )

    def stats(
        self, user_id: str, tier: TierPolicy, period: str = "week"
    ) -> AnalyticsReport:
        """Return analytics for the period visible to the tier."""
        now = self.clock()
        sessions = self.repository.list_sessions(user_id)
        windowed = filter_by_period(sessions, period, now)
        return build_report(windowed, sessions, tier, self.timezone, now)

    def _today_sessions(self, user_id: str, now: datetime) -> list[SessionRecord]:
        local_now = now.astimezone(self.timezone)
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return self.repository.list_sessions_between(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )


def _aware(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value
