"""Subscription tier policies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TierPolicy:
    """Capacity limits and feature gates for a subscription tier.

    ``None`` limits are unbounded.
    """

    name: str
    max_assignments: int | None
    max_daily_sessions: int | None
    default_session_minutes: int
    custom_session_duration: bool
    advanced_analytics: bool
    study_plan: bool
    premium_messages: bool

    @property
    def is_premium(self) -> bool:
        return self.name == "premium"


@dataclass(frozen=True)
class TierCatalog:
    """Resolves a caller's premium flag to a tier policy."""

    free: TierPolicy
    premium: TierPolicy

    def for_flag(self, is_premium: bool) -> TierPolicy:
        """Return the policy for a resolved premium flag."""
        return self.premium if is_premium else self.free


def build_tiers(
    free_max_assignments: int = 10,
    free_max_daily_sessions: int = 5,
    default_session_minutes: int = 25,
) -> TierCatalog:
    """Build the free and premium policies from configured limits."""
    free = TierPolicy(
        name="free",
        max_assignments=free_max_assignments,
        max_daily_sessions=free_max_daily_sessions,
        default_session_minutes=default_session_minutes,
        custom_session_duration=False,
        advanced_analytics=False,
        study_plan=False,
        premium_messages=False,
    )
    premium = TierPolicy(
        name="premium",
        max_assignments=None,
        max_daily_sessions=None,
        default_session_minutes=default_session_minutes,
        custom_session_duration=True,
        advanced_analytics=True,
        study_plan=True,
        premium_messages=True,
    )
    return TierCatalog(free=free, premium=premium)


FREE_TIER = build_tiers().free
PREMIUM_TIER = build_tiers().premium
