"""Enumerations used across the trade journal."""

from enum import Enum


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class TradeResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"  # Only seen on journal entries, never closed


class Timeframe(str, Enum):
    """Equity curve visibility window."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL = "all"


class CardPeriod(str, Enum):
    """Period P&L% summary card."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class RecentPeriod(str, Enum):
    """Filter for the recent-trades list."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class Session(str, Enum):
    """Hour-of-day bucket."""

    OVERNIGHT = "overnight"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


def coerce_enum(enum_cls, value, kind: str):
    """Return ``value`` as a member of ``enum_cls``.

    Accepts the member itself or its string value (case-insensitive).
    Raises UnknownPeriodError for anything else.
    """
    from .errors import UnknownPeriodError

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    raise UnknownPeriodError(kind, value)
