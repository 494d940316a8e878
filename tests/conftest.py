"""Shared test fixtures."""

import random
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from focal_study.adapters.memory_assignment_repository import (
    InMemoryAssignmentRepository,
)
from focal_study.adapters.memory_session_repository import InMemorySessionRepository
from focal_study.api.app import create_app
from focal_study.config import Settings
from focal_study.containers import AppContainer, build_container
from focal_study.services.assignments import AssignmentService
from focal_study.services.sessions import SessionService

# A Tuesday afternoon.
START = datetime(2026, 3, 10, 14, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Controllable clock for services."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", timezone="UTC")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def assignment_service(clock: FakeClock) -> AssignmentService:
    return AssignmentService(InMemoryAssignmentRepository(), clock=clock)


@pytest.fixture
def session_service(clock: FakeClock) -> SessionService:
    return SessionService(InMemorySessionRepository(), clock=clock)


@pytest.fixture
def container(settings: Settings, clock: FakeClock) -> AppContainer:
    built = build_container(settings)
    built.assignment_service.clock = clock
    built.session_service.clock = clock
    built.message_service.rng = random.Random(7)
    return built


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
