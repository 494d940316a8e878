"""Tests for study plan generation."""

from datetime import datetime, timedelta
from uuid import uuid4

from focal_study.domain.assignments import Assignment
from focal_study.services.planner import generate_study_plan, score_assignment
from tests.conftest import START


def _assignment(
    title: str,
    due_in_days: float = 0,
    priority: str = "medium",
    estimated_time: int = 60,
    completed: bool = False,
) -> Assignment:
    return Assignment(
        id=uuid4(),
        title=title,
        description="",
        due_date=START + timedelta(days=due_in_days),
        priority=priority,
        estimated_time=estimated_time,
        course="MATH 200",
        completed=completed,
        created_at=START,
        updated_at=START,
    )


def test_splits_estimate_into_45_minute_blocks() -> None:
    assignment = _assignment("Problem set", priority="high", estimated_time=100)

    plan = generate_study_plan([assignment], now=START)

    assert [block.duration for block in plan.blocks] == [45, 45, 10]
    assert [block.session_number for block in plan.blocks] == [1, 2, 3]
    assert all(block.total_sessions == 3 for block in plan.blocks)
    assert all(block.assignment_id == assignment.id for block in plan.blocks)
    assert plan.blocks[0].course == "MATH 200"
    assert plan.total_minutes == 100


def test_exact_multiple_has_no_remainder_block() -> None:
    plan = generate_study_plan([_assignment("Reading", estimated_time=90)], now=START)

    assert [block.duration for block in plan.blocks] == [45, 45]


def test_orders_assignments_by_score_without_interleaving() -> None:
    distant = _assignment("Distant", due_in_days=20, priority="high", estimated_time=50)
    urgent = _assignment("Urgent", due_in_days=1, priority="low", estimated_time=50)

    plan = generate_study_plan([distant, urgent], now=START)

    assert [block.title for block in plan.blocks] == [
        "Urgent",
        "Urgent",
        "Distant",
        "Distant",
    ]


def test_equal_scores_keep_input_order() -> None:
    first = _assignment("First", due_in_days=2)
    second = _assignment("Second", due_in_days=2)

    plan = generate_study_plan([first, second], now=START)

    assert [block.title for block in plan.blocks][::2] == ["First", "Second"]


def test_completed_assignments_are_skipped() -> None:
    plan = generate_study_plan(
        [_assignment("Done", completed=True), _assignment("Todo", estimated_time=30)],
        now=START,
    )

    assert [block.title for block in plan.blocks] == ["Todo"]
    assert plan.total_hours == 0.5


def test_empty_input_yields_empty_plan() -> None:
    plan = generate_study_plan([], now=START)

    assert plan.blocks == []
    assert plan.total_minutes == 0


def test_score_combines_urgency_and_priority() -> None:
    due_in_four_days = _assignment("Essay", due_in_days=4, priority="high")
    far_away = _assignment("Thesis", due_in_days=30, priority="low")
    overdue = _assignment("Late", due_in_days=-2, priority="medium")

    assert score_assignment(due_in_four_days, START) == 2 * 6 + 1.5 * 3
    assert score_assignment(far_away, START) == 1.5
    assert score_assignment(overdue, START) == 2 * 12 + 1.5 * 2


def test_unknown_priority_scores_zero() -> None:
    assignment = _assignment("Mystery", due_in_days=10, priority="someday")

    assert score_assignment(assignment, START) == 0


def test_uses_current_time_by_default() -> None:
    assignment = _assignment("Now", estimated_time=20)

    plan = generate_study_plan([assignment])

    assert isinstance(plan.blocks[0].due_date, datetime)
    assert plan.total_minutes == 20
