"""Dependency container wiring for the application."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import create_client

from focal_study.adapters.memory_assignment_repository import (
    InMemoryAssignmentRepository,
)
from focal_study.adapters.memory_session_repository import InMemorySessionRepository
from focal_study.adapters.supabase_assignment_repository import (
    SupabaseAssignmentRepository,
)
from focal_study.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from focal_study.config import Settings
from focal_study.domain.tiers import TierCatalog, build_tiers
from focal_study.services.assignments import AssignmentRepository, AssignmentService
from focal_study.services.messages import MessageService
from focal_study.services.sessions import SessionRepository, SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tiers: TierCatalog
    assignment_service: AssignmentService
    session_service: SessionService
    message_service: MessageService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = ZoneInfo(resolved_settings.timezone)
    assignment_repository, session_repository = _build_repositories(
        resolved_settings
    )
    return AppContainer(
        settings=resolved_settings,
        tiers=build_tiers(
            free_max_assignments=resolved_settings.free_max_assignments,
            free_max_daily_sessions=resolved_settings.free_max_daily_sessions,
            default_session_minutes=resolved_settings.default_session_minutes,
        ),
        assignment_service=AssignmentService(assignment_repository, timezone),
        session_service=SessionService(session_repository, timezone),
        message_service=MessageService(),
    )


def _build_repositories(
    settings: Settings,
) -> tuple[AssignmentRepository, SessionRepository]:
    if settings.storage_backend == "memory":
        return InMemoryAssignmentRepository(), InMemorySessionRepository()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseAssignmentRepository(client), SupabaseSessionRepository(client)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
