"""Tests for session analytics."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from focal_study.domain.sessions import SessionRecord
from focal_study.domain.tiers import FREE_TIER, PREMIUM_TIER
from focal_study.services.analytics import (
    basic_stats,
    best_productivity_time,
    build_report,
    filter_by_period,
    focus_time_by_assignment,
    productivity_score,
    streak_days,
    weekly_progress,
)
from tests.conftest import START


def _session(
    start_time: datetime,
    actual_duration: int = 25,
    completed: bool = True,
    interrupted: bool = False,
    assignment_id: UUID | None = None,
) -> SessionRecord:
    return SessionRecord(
        id=uuid4(),
        assignment_id=assignment_id,
        type="focus",
        duration=25,
        start_time=start_time,
        end_time=start_time + timedelta(minutes=actual_duration),
        completed=completed,
        interrupted=interrupted,
        actual_duration=actual_duration,
    )


def test_basic_stats_totals_and_average() -> None:
    sessions = [
        _session(START, actual_duration=25),
        _session(START, actual_duration=20, completed=False),
        _session(START, actual_duration=26),
    ]

    stats = basic_stats(sessions)

    assert stats.total_sessions == 3
    assert stats.completed_sessions == 2
    assert stats.total_minutes == 71
    assert stats.average_session_length == 24


def test_basic_stats_empty_and_repeatable() -> None:
    sessions = (_session(START), _session(START, completed=False))

    assert basic_stats([]).average_session_length == 0
    assert basic_stats(sessions) == basic_stats(sessions)


def test_productivity_score_counts_clean_completions() -> None:
    sessions = [
        _session(START),
        _session(START),
        _session(START),
        _session(START, completed=True, interrupted=True),
    ]

    assert productivity_score(sessions) == 75
    assert productivity_score([]) == 0


def test_best_time_prefers_most_completions() -> None:
    morning = START.replace(hour=9)
    evening = START.replace(hour=20)
    sessions = [
        _session(morning),
        _session(evening),
        _session(evening + timedelta(minutes=30)),
        _session(evening, completed=False),
    ]

    assert best_productivity_time(sessions) == "20:00 - 21:00"


def test_best_time_tie_resolves_to_earliest_hour() -> None:
    sessions = [_session(START.replace(hour=16)), _session(START.replace(hour=8))]

    assert best_productivity_time(sessions) == "8:00 - 9:00"


def test_best_time_without_completions_defaults_to_midnight() -> None:
    sessions = [_session(START.replace(hour=11), completed=False)]

    assert best_productivity_time(sessions) == "0:00 - 1:00"


def test_best_time_uses_local_hour() -> None:
    sessions = [_session(START.replace(hour=14))]

    assert best_productivity_time(sessions, ZoneInfo("America/New_York")) == (
        "10:00 - 11:00"
    )


def test_streak_stops_at_first_gap() -> None:
    sessions = [
        _session(START),
        _session(START - timedelta(days=1)),
        _session(START - timedelta(days=3)),
    ]

    assert streak_days(sessions, now=START) == 2


def test_streak_counts_each_day_once() -> None:
    sessions = [
        _session(START),
        _session(START - timedelta(hours=1)),
        _session(START - timedelta(days=1)),
    ]

    assert streak_days(sessions, now=START) == 2


def test_streak_requires_session_today() -> None:
    sessions = [_session(START - timedelta(days=1))]

    assert streak_days(sessions, now=START) == 0
    assert streak_days([], now=START) == 0


def test_weekly_progress_starts_on_sunday() -> None:
    # START is a Tuesday.
    sessions = [
        _session(START, actual_duration=25),
        _session(START + timedelta(hours=1), actual_duration=30),
        _session(START - timedelta(days=2), actual_duration=10),
    ]

    progress = weekly_progress(sessions)

    assert [entry.day for entry in progress] == [
        "Sun",
        "Mon",
        "Tue",
        "Wed",
        "Thu",
        "Fri",
        "Sat",
    ]
    assert (progress[0].sessions, progress[0].minutes) == (1, 10)
    assert (progress[2].sessions, progress[2].minutes) == (2, 55)
    assert progress[1].sessions == 0


def test_focus_time_groups_by_assignment() -> None:
    essay = uuid4()
    lab = uuid4()
    sessions = [
        _session(START, actual_duration=25, assignment_id=essay),
        _session(START, actual_duration=15, assignment_id=lab),
        _session(START, actual_duration=20, assignment_id=essay),
        _session(START, actual_duration=40),
    ]

    focus = focus_time_by_assignment(sessions)

    assert [
        (entry.assignment_id, entry.total_minutes, entry.session_count)
        for entry in focus
    ] == [(essay, 45, 2), (lab, 15, 1)]


def test_filter_by_period_windows() -> None:
    recent = _session(START - timedelta(hours=2))
    last_week = _session(START - timedelta(days=5))
    old = _session(START - timedelta(days=40))
    sessions = [old, last_week, recent]

    assert filter_by_period(sessions, "day", START) == [recent]
    assert filter_by_period(sessions, "week", START) == [last_week, recent]
    assert filter_by_period(sessions, "month", START) == [last_week, recent]
    assert filter_by_period(sessions, "all", START) == sessions


def test_report_for_free_tier_has_basic_stats_only() -> None:
    sessions = [_session(START)]

    report = build_report(sessions, sessions, FREE_TIER, now=START)

    assert report.basic.total_sessions == 1
    assert report.requires_premium is True
    assert report.message
    assert report.weekly_progress is None


def test_report_streak_uses_full_history() -> None:
    today = _session(START)
    yesterday = _session(START - timedelta(days=1))

    report = build_report([today], [yesterday, today], PREMIUM_TIER, now=START)

    assert report.basic.total_sessions == 1
    assert report.streak_days == 2
    assert report.requires_premium is False
