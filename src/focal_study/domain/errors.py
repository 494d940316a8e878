"""Error taxonomy for store and planner operations."""

from uuid import UUID


class FocalStudyError(Exception):
    """Base class for domain errors surfaced to callers."""


class ValidationError(FocalStudyError):
    """Raised when required input is missing or malformed."""


class NotFoundError(FocalStudyError):
    """Raised when a referenced assignment or session does not exist."""

    def __init__(self, entity: str, entity_id: UUID | str) -> None:
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity
        self.entity_id = entity_id


class LimitExceededError(FocalStudyError):
    """Raised when a tier capacity or capability gate is hit."""

    def __init__(
        self, message: str, limit: int | None = None, requires_premium: bool = True
    ) -> None:
        super().__init__(message)
        self.limit = limit
        self.requires_premium = requires_premium


class AlreadyTerminatedError(FocalStudyError):
    """Raised when a session end is requested more than once."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__("Session already ended")
        self.session_id = session_id
