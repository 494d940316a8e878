"""FastAPI application factory."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from focal_study.api.models import (
    ActiveSessionOut,
    AnalyticsOut,
    AssignmentFocusOut,
    AssignmentOut,
    AssignmentPayload,
    MessageCategoryOut,
    SessionEndPayload,
    SessionOut,
    SessionStartPayload,
    StudyBlockOut,
    WeekdayProgressOut,
)
from focal_study.app_logging import configure_logging
from focal_study.config import parse_premium_flag
from focal_study.containers import AppContainer
from focal_study.domain.analytics import AnalyticsReport
from focal_study.domain.assignments import Assignment
from focal_study.domain.errors import (
    AlreadyTerminatedError,
    FocalStudyError,
    LimitExceededError,
    NotFoundError,
    ValidationError,
)
from focal_study.domain.sessions import SessionRecord
from focal_study.domain.tiers import TierPolicy

_SORT_KEYS = {"dueDate": "due_date", "createdAt": "created_at"}


@dataclass(frozen=True)
class CallerContext:
    """Identity and tier resolved by the upstream auth layer."""

    user_id: str
    tier: TierPolicy


def _get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def caller_context(
    request: Request,
    x_user_id: str | None = Header(default=None),
    x_premium: str | None = Header(default=None),
) -> CallerContext:
    """Resolve the caller from the identity headers."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container = _get_container(request)
    return CallerContext(
        user_id=x_user_id.strip(),
        tier=container.tiers.for_flag(parse_premium_flag(x_premium)),
    )


Caller = Annotated[CallerContext, Depends(caller_context)]


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Focal Study API")
    app.state.container = container

    @app.exception_handler(FocalStudyError)
    async def handle_domain_error(
        request: Request, exc: FocalStudyError
    ) -> JSONResponse:
        status_code, body = _error_response(exc)
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error": type(exc).__name__},
        )
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/assignments", status_code=status.HTTP_201_CREATED)
    async def create_assignment(
        payload: AssignmentPayload, caller: Caller, request: Request
    ) -> dict[str, object]:
        """Create an assignment."""
        service = _get_container(request).assignment_service
        assignment = service.create(
            caller.user_id, caller.tier, payload.model_dump(exclude_unset=True)
        )
        return _assignment_json(assignment)

    @app.get("/api/assignments")
    async def list_assignments(
        caller: Caller,
        request: Request,
        completed: bool | None = None,
        sort_by: Annotated[str, Query(alias="sortBy")] = "dueDate",
    ) -> dict[str, object]:
        """List assignments with optional filter and ordering."""
        service = _get_container(request).assignment_service
        assignments = service.list_assignments(
            caller.user_id,
            completed=completed,
            sort_by=_SORT_KEYS.get(sort_by, sort_by),
        )
        return {
            "assignments": [_assignment_json(item) for item in assignments],
            "count": len(assignments),
        }

    @app.get("/api/assignments/study-plan")
    async def study_plan(caller: Caller, request: Request) -> dict[str, object]:
        """Return the prioritized study plan (premium)."""
        service = _get_container(request).assignment_service
        plan = service.study_plan(caller.user_id, caller.tier)
        body: dict[str, object] = {
            "plan": [
                StudyBlockOut.model_validate(block).model_dump(
                    by_alias=True, mode="json"
                )
                for block in plan.blocks
            ],
            "totalMinutes": plan.total_minutes,
            "totalHours": plan.total_hours,
        }
        if not plan.blocks:
            body["message"] = "No incomplete assignments"
        return body

    @app.get("/api/assignments/{assignment_id}")
    async def get_assignment(
        assignment_id: UUID, caller: Caller, request: Request
    ) -> dict[str, object]:
        """Return one assignment."""
        service = _get_container(request).assignment_service
        return _assignment_json(service.get(caller.user_id, assignment_id))

    @app.api_route("/api/assignments/{assignment_id}", methods=["PUT", "PATCH"])
    async def update_assignment(
        assignment_id: UUID,
        payload: AssignmentPayload,
        caller: Caller,
        request: Request,
    ) -> dict[str, object]:
        """Merge fields into an assignment."""
        service = _get_container(request).assignment_service
        assignment = service.update(
            caller.user_id, assignment_id, payload.model_dump(exclude_unset=True)
        )
        return _assignment_json(assignment)

    @app.delete("/api/assignments/{assignment_id}")
    async def delete_assignment(
        assignment_id: UUID, caller: Caller, request: Request
    ) -> dict[str, str]:
        """Delete an assignment."""
        _get_container(request).assignment_service.delete(
            caller.user_id, assignment_id
        )
        return {"message": "Assignment deleted successfully"}

    @app.post("/api/sessions", status_code=status.HTTP_201_CREATED)
    async def start_session(
        payload: SessionStartPayload, caller: Caller, request: Request
    ) -> dict[str, object]:
        """Start a focus or break session."""
        service = _get_container(request).session_service
        session = service.start(
            caller.user_id,
            caller.tier,
            assignment_id=payload.assignment_id,
            duration=payload.duration,
            session_type=payload.type,
        )
        return _session_json(session)

    @app.get("/api/sessions/history")
    async def session_history(  # noqa: PLR0913
        caller: Caller,
        request: Request,
        start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
        end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
        assignment_id: Annotated[UUID | None, Query(alias="assignmentId")] = None,
        limit: int | None = None,
    ) -> dict[str, object]:
        """Return session history with optional filters."""
        service = _get_container(request).session_service
        sessions = service.history(
            caller.user_id,
            start_date=start_date,
            end_date=end_date,
            assignment_id=assignment_id,
            limit=limit,
        )
        return {
            "sessions": [_session_json(item) for item in sessions],
            "count": len(sessions),
        }

    @app.get("/api/sessions/active")
    async def active_session(caller: Caller, request: Request) -> dict[str, object]:
        """Return the open session with elapsed and remaining minutes."""
        active = _get_container(request).session_service.active(caller.user_id)
        if active is None:
            return {"activeSession": None}
        out = ActiveSessionOut(
            **SessionOut.model_validate(active.session).model_dump(),
            elapsed_minutes=active.elapsed_minutes,
            remaining_minutes=active.remaining_minutes,
        )
        return {"activeSession": out.model_dump(by_alias=True, mode="json")}

    @app.get("/api/sessions/stats")
    async def session_stats(
        caller: Caller, request: Request, period: str = "week"
    ) -> dict[str, object]:
        """Return session analytics for a period."""
        service = _get_container(request).session_service
        report = service.stats(caller.user_id, caller.tier, period)
        return _analytics_json(report)

    @app.post("/api/sessions/{session_id}/end")
    async def end_session(
        session_id: UUID,
        caller: Caller,
        request: Request,
        payload: SessionEndPayload | None = None,
    ) -> dict[str, object]:
        """End an open session."""
        body = payload or SessionEndPayload()
        session = _get_container(request).session_service.end(
            caller.user_id,
            session_id,
            completed=body.completed,
            interrupted=body.interrupted,
        )
        return _session_json(session)

    @app.get("/api/messages")
    async def get_message(
        caller: Caller, request: Request, category: str | None = None
    ) -> dict[str, object]:
        """Return a random motivational message."""
        service = _get_container(request).message_service
        message = service.get_message(caller.tier, category)
        return {
            "message": message,
            "category": category or "daily_motivation",
            "isPremium": caller.tier.is_premium,
        }

    @app.get("/api/messages/batch")
    async def get_messages(
        caller: Caller,
        request: Request,
        category: str | None = None,
        count: int = 3,
    ) -> dict[str, object]:
        """Return several distinct messages (premium)."""
        service = _get_container(request).message_service
        messages = service.get_messages(caller.tier, category, count)
        return {
            "messages": messages,
            "category": category or "daily_motivation",
            "count": len(messages),
            "isPremium": caller.tier.is_premium,
        }

    @app.get("/api/messages/daily")
    async def message_of_the_day(
        caller: Caller, request: Request
    ) -> dict[str, object]:
        """Return the message of the day."""
        container = _get_container(request)
        today = container.session_service.clock().astimezone(
            container.session_service.timezone
        )
        message = container.message_service.message_of_the_day(
            caller.tier, today.date()
        )
        return {
            "message": message,
            "date": today.date().isoformat(),
            "isPremium": caller.tier.is_premium,
        }

    @app.get("/api/messages/categories")
    async def message_categories(
        caller: Caller, request: Request
    ) -> dict[str, object]:
        """List message categories with availability."""
        service = _get_container(request).message_service
        return {
            "categories": [
                MessageCategoryOut.model_validate(item).model_dump(by_alias=True)
                for item in service.categories(caller.tier)
            ],
            "isPremium": caller.tier.is_premium,
        }

    return app


def _error_response(exc: FocalStudyError) -> tuple[int, dict[str, object]]:
    """Map a domain error to a status code and JSON body."""
    body: dict[str, object] = {"error": str(exc)}
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST, body
    if isinstance(exc, NotFoundError):
        body["id"] = str(exc.entity_id)
        return status.HTTP_404_NOT_FOUND, body
    if isinstance(exc, LimitExceededError):
        if exc.limit is not None:
            body["limit"] = exc.limit
        body["requiresPremium"] = exc.requires_premium
        if exc.requires_premium:
            body["message"] = "Upgrade to premium to unlock this"
        return status.HTTP_403_FORBIDDEN, body
    if isinstance(exc, AlreadyTerminatedError):
        body["id"] = str(exc.session_id)
        return status.HTTP_409_CONFLICT, body
    return status.HTTP_400_BAD_REQUEST, body


def _assignment_json(assignment: Assignment) -> dict[str, object]:
    return AssignmentOut.model_validate(assignment).model_dump(
        by_alias=True, mode="json"
    )


def _session_json(session: SessionRecord) -> dict[str, object]:
    return SessionOut.model_validate(session).model_dump(by_alias=True, mode="json")


def _analytics_json(report: AnalyticsReport) -> dict[str, object]:
    basic = report.basic
    out = AnalyticsOut(
        total_sessions=basic.total_sessions,
        completed_sessions=basic.completed_sessions,
        total_minutes=basic.total_minutes,
        average_session_length=basic.average_session_length,
        productivity_score=report.productivity_score,
        best_productivity_time=report.best_productivity_time,
        streak_days=report.streak_days,
        weekly_progress=(
            [WeekdayProgressOut.model_validate(day) for day in report.weekly_progress]
            if report.weekly_progress is not None
            else None
        ),
        focus_time_by_assignment=(
            [
                AssignmentFocusOut.model_validate(entry)
                for entry in report.focus_time_by_assignment
            ]
            if report.focus_time_by_assignment is not None
            else None
        ),
        message=report.message,
        requires_premium=report.requires_premium or None,
    )
    return out.model_dump(by_alias=True, mode="json", exclude_none=True)
