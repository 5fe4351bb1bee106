"""Shared fixtures for the trade-journal test suite."""

from __future__ import annotations

from datetime import datetime

import pytest

from trade_journal.core.clock import FixedClock


@pytest.fixture
def now() -> datetime:
    """Wednesday 2026-01-14 15:00 local."""
    return datetime(2026, 1, 14, 15, 0, 0)


@pytest.fixture
def fixed_clock(now) -> FixedClock:
    return FixedClock(now)
