"""Motivational message catalog."""

from dataclasses import dataclass

START_SESSION = "start_session"
END_SESSION = "end_session"
BREAK_TIME = "break_time"
STREAK_MILESTONE = "streak_milestone"
DAILY_MOTIVATION = "daily_motivation"
PREMIUM_EXCLUSIVE = "premium_exclusive"

CATEGORIES = (
    START_SESSION,
    END_SESSION,
    BREAK_TIME,
    STREAK_MILESTONE,
    DAILY_MOTIVATION,
    PREMIUM_EXCLUSIVE,
)

FREE_MESSAGES: dict[str, tuple[str, ...]] = {
    START_SESSION: (
        "Let's crush this study session!",
        "Time to focus! You've got this!",
        "Ready to make progress? Let's go!",
        "Focus mode activated!",
        "Another step towards your goals!",
        "Your future self will thank you!",
    ),
    END_SESSION: (
        "Great work! You stayed focused!",
        "Session complete! You're making progress!",
        "Well done! Keep up the momentum!",
        "Another session in the books!",
        "Excellent focus! Time for a break!",
    ),
    BREAK_TIME: (
        "Take a breather. You've earned it!",
        "Stretch, hydrate, and reset.",
        "Rest your eyes for a few minutes.",
        "A short walk helps the next session stick.",
    ),
    STREAK_MILESTONE: (
        "Your streak is growing! Keep it alive!",
        "Consistency beats intensity. Nice streak!",
        "Another day, another win for your streak!",
    ),
    DAILY_MOTIVATION: (
        "Small steps every day add up to big results.",
        "Discipline is choosing what you want most over what you want now.",
        "Progress, not perfection.",
        "Start where you are. Use what you have. Do what you can.",
        "The expert in anything was once a beginner.",
        "Focus on the next 25 minutes, not the whole mountain.",
    ),
}

PREMIUM_MESSAGES: dict[str, tuple[str, ...]] = {
    PREMIUM_EXCLUSIVE: (
        "Deep work is a superpower. You're building it one block at a time.",
        "Plan the hard thing first while your focus is fresh.",
        "Review what you learned yesterday before starting today.",
        "Protect your best hours. They are where the real work happens.",
        "You're investing in yourself. That compounding starts now.",
    ),
    **FREE_MESSAGES,
}


@dataclass(frozen=True)
class MessageCategory:
    """A message category and whether the caller may use it."""

    id: str
    name: str
    available: bool
    premium: bool = False
