"""Productivity analytics over focus session history."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta, tzinfo
from uuid import UUID

from focal_study.domain.analytics import (
    AnalyticsReport,
    AssignmentFocus,
    BasicStats,
    WeekdayProgress,
)
from focal_study.domain.sessions import SessionRecord
from focal_study.domain.tiers import TierPolicy

PERIOD_WINDOWS = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
UPGRADE_MESSAGE = "Upgrade to premium for advanced analytics"


def filter_by_period(
    sessions: Sequence[SessionRecord], period: str, now: datetime | None = None
) -> list[SessionRecord]:
    """Return sessions started within the period window; ``all`` is unfiltered."""
    window = PERIOD_WINDOWS.get(period)
    if window is None:
        return list(sessions)
    cutoff = (now or datetime.now(tz=UTC)) - window
    return [session for session in sessions if session.start_time >= cutoff]


def basic_stats(sessions: Sequence[SessionRecord]) -> BasicStats:
    """Return session counts and minutes."""
    total = len(sessions)
    total_minutes = sum(session.actual_duration for session in sessions)
    return BasicStats(
        total_sessions=total,
        completed_sessions=sum(1 for session in sessions if session.completed),
        total_minutes=total_minutes,
        average_session_length=round(total_minutes / total) if total else 0,
    )


def productivity_score(sessions: Sequence[SessionRecord]) -> int:
    """Return the 0-100 share of sessions completed without interruption."""
    if not sessions:
        return 0
    clean = sum(
        1 for session in sessions if session.completed and not session.interrupted
    )
    return round(100 * clean / len(sessions))


def best_productivity_time(
    sessions: Sequence[SessionRecord], tz: tzinfo = UTC
) -> str:
    """Return the hour range with the most completed sessions."""
    counts = [0] * 24
    completed = [0] * 24
    for session in sessions:
        hour = session.start_time.astimezone(tz).hour
        counts[hour] += 1
        if session.completed:
            completed[hour] += 1

    best_hour = 0
    best_score = 0.0
    for hour in range(24):
        if counts[hour] == 0:
            continue
        score = (completed[hour] / counts[hour]) * counts[hour]
        if score > best_score:
            best_score = score
            best_hour = hour
    return f"{best_hour}:00 - {best_hour + 1}:00"


def streak_days(
    sessions: Sequence[SessionRecord],
    tz: tzinfo = UTC,
    now: datetime | None = None,
) -> int:
    """Count consecutive days with a session, counting back from today."""
    if not sessions:
        return 0
    days = sorted(
        {session.start_time.astimezone(tz).date() for session in sessions},
        reverse=True,
    )
    today = (now or datetime.now(tz=UTC)).astimezone(tz).date()
    streak = 0
    for offset, day in enumerate(days):
        if day != _days_before(today, offset):
            break
        streak += 1
    return streak


def weekly_progress(
    sessions: Sequence[SessionRecord], tz: tzinfo = UTC
) -> list[WeekdayProgress]:
    """Return session counts and minutes per weekday, Sunday first."""
    counts = [0] * 7
    minutes = [0] * 7
    for session in sessions:
        # date.weekday() is Monday-based; shift to a Sunday-based index.
        index = (session.start_time.astimezone(tz).weekday() + 1) % 7
        counts[index] += 1
        minutes[index] += session.actual_duration
    return [
        WeekdayProgress(day=day, sessions=counts[index], minutes=minutes[index])
        for index, day in enumerate(WEEKDAYS)
    ]


def focus_time_by_assignment(
    sessions: Sequence[SessionRecord],
) -> list[AssignmentFocus]:
    """Return minutes and session counts per linked assignment."""
    totals: dict[UUID, list[int]] = {}
    for session in sessions:
        if session.assignment_id is None:
            continue
        entry = totals.setdefault(session.assignment_id, [0, 0])
        entry[0] += session.actual_duration
        entry[1] += 1
    return [
        AssignmentFocus(
            assignment_id=assignment_id,
            total_minutes=total_minutes,
            session_count=session_count,
        )
        for assignment_id, (total_minutes, session_count) in totals.items()
    ]


def build_report(
    windowed: Sequence[SessionRecord],
    all_sessions: Sequence[SessionRecord],
    tier: TierPolicy,
    tz: tzinfo = UTC,
    now: datetime | None = None,
) -> AnalyticsReport:
    """Assemble the analytics visible to a tier.

    Streaks always look at the full history; every other figure uses the
    windowed sessions.
    """
    basic = basic_stats(windowed)
    if not tier.advanced_analytics:
        return AnalyticsReport(
            basic=basic, requires_premium=True, message=UPGRADE_MESSAGE
        )
    return AnalyticsReport(
        basic=basic,
        productivity_score=productivity_score(windowed),
        best_productivity_time=best_productivity_time(windowed, tz),
        streak_days=streak_days(all_sessions, tz, now),
        weekly_progress=weekly_progress(windowed, tz),
        focus_time_by_assignment=focus_time_by_assignment(windowed),
    )


def _days_before(day: date, offset: int) -> date:
    return day - timedelta(days=offset)
