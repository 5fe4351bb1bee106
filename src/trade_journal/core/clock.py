"""Clock abstraction for "now"-relative analytics.

WallClock: real wall-clock time (CLI, live dashboards)
FixedClock: a pinned instant (``--now``, tests, reproducible reports)

Analytics never call datetime.now() directly; the caller passes
``clock.now()`` in explicitly.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current local wall-clock time (naive)."""
        ...


class WallClock:
    """Real wall-clock time.

    Reads the time in ``tz`` when given, else in the system's local
    zone, and drops the zone.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz).replace(tzinfo=None)


class FixedClock:
    """Clock pinned to a given instant."""

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2026, 1, 1, 12, 0, 0)

    def now(self) -> datetime:
        return self._time
