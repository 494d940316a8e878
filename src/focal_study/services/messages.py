"""Motivational message selection."""

import random
from dataclasses import dataclass, field
from datetime import date

from focal_study.domain.errors import LimitExceededError, ValidationError
from focal_study.domain.messages import (
    CATEGORIES,
    DAILY_MOTIVATION,
    FREE_MESSAGES,
    PREMIUM_EXCLUSIVE,
    PREMIUM_MESSAGES,
    MessageCategory,
)
from focal_study.domain.tiers import TierPolicy

MAX_BATCH = 10


@dataclass
class MessageService:
    """Picks motivational messages using an injected random source."""

    rng: random.Random = field(default_factory=random.Random)

    def get_message(self, tier: TierPolicy, category: str | None = None) -> str:
        """Return one random message from the tier's pool."""
        resolved = self._resolve_category(tier, category)
        return self.rng.choice(_pool(tier, resolved))

    def get_messages(
        self, tier: TierPolicy, category: str | None = None, count: int = 3
    ) -> list[str]:
        """Return up to ``count`` distinct messages (premium only)."""
        if not tier.premium_messages:
            raise LimitExceededError(
                "Multiple messages is a premium feature", requires_premium=True
            )
        resolved = self._resolve_category(tier, category)
        pool = _pool(tier, resolved)
        size = max(0, min(count, len(pool), MAX_BATCH))
        return self.rng.sample(pool, size)

    def message_of_the_day(self, tier: TierPolicy, today: date) -> str:
        """Return the daily message, stable for a given calendar day."""
        pool = _pool(tier, DAILY_MOTIVATION)
        day_of_year = today.timetuple().tm_yday
        return pool[day_of_year % len(pool)]

    def categories(self, tier: TierPolicy) -> list[MessageCategory]:
        """List categories with availability for the tier."""
        listed = [
            MessageCategory(id=key, name=_display_name(key), available=True)
            for key in FREE_MESSAGES
        ]
        listed.append(
            MessageCategory(
                id=PREMIUM_EXCLUSIVE,
                name=_display_name(PREMIUM_EXCLUSIVE),
                available=tier.premium_messages,
                premium=True,
            )
        )
        return listed

    def _resolve_category(self, tier: TierPolicy, category: str | None) -> str:
        if category and category not in CATEGORIES:
            raise ValidationError(f"Invalid message category: {category}")
        if category == PREMIUM_EXCLUSIVE and not tier.premium_messages:
            raise LimitExceededError(
                "Premium exclusive messages require premium subscription",
                requires_premium=True,
            )
        return category or DAILY_MOTIVATION


def _pool(tier: TierPolicy, category: str) -> list[str]:
    messages = PREMIUM_MESSAGES if tier.premium_messages else FREE_MESSAGES
    return list(messages.get(category) or messages[DAILY_MOTIVATION])


def _display_name(key: str) -> str:
    return " ".join(word.capitalize() for word in key.split("_"))
