"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    timezone: str = "UTC"
    log_level: str = "INFO"
    free_max_assignments: int = 10
    free_max_daily_sessions: int = 5
    default_session_minutes: int = 25
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_premium_flag(raw: str | None) -> bool:
    """Parse the caller's premium flag from a header value."""
    if raw is None:
        return False
    return raw.strip().lower() in _TRUE_VALUES
