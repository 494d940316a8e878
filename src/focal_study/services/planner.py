"""Study plan generation for outstanding assignments."""

import math
from collections.abc import Iterable
from datetime import UTC, datetime

from focal_study.domain.assignments import PRIORITY_WEIGHTS, Assignment
from focal_study.domain.plans import StudyBlock, StudyPlan

BLOCK_MINUTES = 45
URGENCY_HORIZON_DAYS = 10
URGENCY_WEIGHT = 2
PRIORITY_WEIGHT = 1.5
_SECONDS_PER_DAY = 86400


def score_assignment(assignment: Assignment, now: datetime) -> float:
    """Return the plan score; higher means study sooner.

    Urgency decays linearly to zero for assignments due ten or more days
    out and keeps growing past the horizon once an assignment is overdue.
    """
    days_until_due = (assignment.due_date - now).total_seconds() / _SECONDS_PER_DAY
    urgency = max(0.0, URGENCY_HORIZON_DAYS - days_until_due)
    priority = PRIORITY_WEIGHTS.get(assignment.priority, 0)
    return URGENCY_WEIGHT * urgency + PRIORITY_WEIGHT * priority


def split_into_blocks(assignment: Assignment) -> list[StudyBlock]:
    """Split an assignment's estimated time into sequential study blocks."""
    total_sessions = math.ceil(assignment.estimated_time / BLOCK_MINUTES)
    return [
        StudyBlock(
            assignment_id=assignment.id,
            title=assignment.title,
            course=assignment.course,
            due_date=assignment.due_date,
            priority=assignment.priority,
            session_number=index + 1,
            total_sessions=total_sessions,
            duration=min(
                BLOCK_MINUTES, assignment.estimated_time - index * BLOCK_MINUTES
            ),
        )
        for index in range(total_sessions)
    ]


def generate_study_plan(
    assignments: Iterable[Assignment], now: datetime | None = None
) -> StudyPlan:
    """Build a study plan from the outstanding assignments in the input."""
    moment = now or datetime.now(tz=UTC)
    outstanding = [item for item in assignments if not item.completed]
    # sorted() is stable, so equal scores keep their input order.
    ranked = sorted(
        outstanding,
        key=lambda item: score_assignment(item, moment),
        reverse=True,
    )
    blocks: list[StudyBlock] = []
    for assignment in ranked:
        blocks.extend(split_into_blocks(assignment))
    return StudyPlan(blocks=blocks)
