"""Weekly and monthly performance trackers.

Trades are folded into calendar buckets keyed by small immutable key
objects (:class:`WeekKey`, :class:`MonthKey`) instead of formatted
strings, so ordering and equality never depend on locale.  Bucket
assignment depends only on each trade's own date, never on "now".

Weekly buckets are currency based (``gainLoss``); monthly buckets are
percentage based (``pnlPercent``) and carry a letter grade.

Usage::

    weeks = aggregate_weekly(trades)     # newest week first
    months = aggregate_monthly(trades)   # newest month first
    print(months[0].key, months[0].grade)
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.enums import Grade
from .grading import grade_month
from .record import TradeRecord, dated_trades
from .tally import Tally, safe_div

logger = logging.getLogger(__name__)


# ================================================================== #
# Period keys                                                         #
# ================================================================== #

@dataclass(frozen=True, order=True)
class WeekKey:
    """Monday-to-Sunday week, identified by its Monday."""

    start: date

    @classmethod
    def for_date(cls, d: date) -> WeekKey:
        """Week containing ``d``; a Sunday belongs to the preceding Monday."""
        if isinstance(d, datetime):
            d = d.date()
        return cls(start=d - timedelta(days=d.weekday()))

    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    @property
    def label(self) -> str:
        """e.g. ``"Jan 26 - Feb 1, 2026"``."""
        return (
            f"{self.start.strftime('%b')} {self.start.day} - "
            f"{self.end.strftime('%b')} {self.end.day}, {self.end.year}"
        )

    def __str__(self) -> str:
        return self.start.isoformat()


@dataclass(frozen=True, order=True)
class MonthKey:
    """Calendar month."""

    year: int
    month: int

    @classmethod
    def for_date(cls, d: date) -> MonthKey:
        return cls(year=d.year, month=d.month)

    @property
    def label(self) -> str:
        """e.g. ``"January 2026"``."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# ================================================================== #
# Weekly                                                              #
# ================================================================== #

@dataclass(frozen=True)
class WeeklySummary:
    """One week of trading, in currency terms.

    ``expectancy`` is the currency expectancy expressed as a percentage
    of the average loss.  ``pnl_percent`` equals ``pnl`` (currency) when
    the week has closed trades and 0 otherwise.
    """

    key: WeekKey
    trades: tuple[TradeRecord, ...]
    wins: int
    losses: int
    total_gain: float
    total_loss: float
    fees: float
    pnl: float
    win_rate: float
    avg_win: float
    avg_loss: float
    expectancy: float
    profit_factor: float
    pnl_percent: float

    @property
    def start_date(self) -> date:
        return self.key.start

    @property
    def end_date(self) -> date:
        return self.key.end

    @property
    def label(self) -> str:
        return self.key.label

    @property
    def trade_count(self) -> int:
        return len(self.trades)


def _weekly_summary(key: WeekKey, trades: list[TradeRecord], tally: Tally) -> WeeklySummary:
    # Kept as the stored "weekly P&L%" value: net currency P&L, unscaled.
    pnl_percent = tally.pnl if tally.closed > 0 else 0.0
    return WeeklySummary(
        key=key,
        trades=tuple(trades),
        wins=tally.wins,
        losses=tally.losses,
        total_gain=tally.gross_gain,
        total_loss=tally.gross_loss,
        fees=tally.fees,
        pnl=tally.pnl,
        win_rate=tally.win_rate,
        avg_win=tally.avg_gain,
        avg_loss=tally.avg_loss,
        expectancy=tally.currency_expectancy,
        profit_factor=tally.currency_profit_factor,
        pnl_percent=pnl_percent,
    )


def aggregate_weekly(trades: Iterable[TradeRecord]) -> list[WeeklySummary]:
    """Per-week summaries over every dated trade, newest week first.

    Open trades count toward fees and net P&L but not toward wins or
    losses.
    """
    buckets: dict[WeekKey, tuple[list[TradeRecord], Tally]] = {}
    for trade in dated_trades(trades):
        key = WeekKey.for_date(trade.trade_date)
        members, tally = buckets.setdefault(key, ([], Tally()))
        members.append(trade)
        tally.record(trade)

    summaries = [_weekly_summary(k, m, t) for k, (m, t) in buckets.items()]
    summaries.sort(key=lambda s: s.key, reverse=True)
    logger.debug("Aggregated %d week(s)", len(summaries))
    return summaries


# ================================================================== #
# Monthly                                                             #
# ================================================================== #

@dataclass(frozen=True)
class MonthlySummary:
    """One calendar month of trading, in P&L% terms, with its grade.

    ``avg_loss`` is negative (average losing P&L%).  ``expectancy`` is
    already a percentage: ``p * avg_win + (1 - p) * avg_loss``.
    """

    key: MonthKey
    trades: tuple[TradeRecord, ...]
    wins: int
    losses: int
    total_win_percent: float
    total_loss_percent_abs: float
    total_pnl: float
    total_pnl_percent: float
    win_rate: float
    avg_win: float
    avg_loss: float
    expectancy: float
    profit_factor: float
    grade: Grade
    score: int

    @property
    def monthly_pnl_percent(self) -> float:
        return self.total_pnl_percent

    @property
    def label(self) -> str:
        return self.key.label

    @property
    def closed_trades(self) -> int:
        return self.wins + self.losses


def _monthly_summary(key: MonthKey, trades: list[TradeRecord], tally: Tally) -> MonthlySummary:
    win_rate = tally.win_rate
    avg_win = safe_div(tally.win_percent, tally.wins)
    avg_loss = -safe_div(tally.loss_percent_abs, tally.losses)
    if tally.closed > 0:
        p = win_rate / 100
        expectancy = p * avg_win + (1 - p) * avg_loss
    else:
        expectancy = 0.0
    profit_factor = safe_div(tally.win_percent, tally.loss_percent_abs)

    graded = grade_month(
        monthly_pnl_percent=tally.pnl_percent,
        profit_factor=profit_factor,
        expectancy_percent=expectancy,
        total_pnl=tally.pnl,
    )
    return MonthlySummary(
        key=key,
        trades=tuple(trades),
        wins=tally.wins,
        losses=tally.losses,
        total_win_percent=tally.win_percent,
        total_loss_percent_abs=tally.loss_percent_abs,
        total_pnl=tally.pnl,
        total_pnl_percent=tally.pnl_percent,
        win_rate=win_rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        expectancy=expectancy,
        profit_factor=profit_factor,
        grade=graded.grade,
        score=graded.score,
    )


def aggregate_monthly(trades: Iterable[TradeRecord]) -> list[MonthlySummary]:
    """Per-month summaries with grades, newest month first."""
    buckets: dict[MonthKey, tuple[list[TradeRecord], Tally]] = {}
    for trade in dated_trades(trades):
        key = MonthKey.for_date(trade.trade_date)
        members, tally = buckets.setdefault(key, ([], Tally()))
        members.append(trade)
        tally.record(trade)

    summaries = [_monthly_summary(k, m, t) for k, (m, t) in buckets.items()]
    summaries.sort(key=lambda s: s.key, reverse=True)
    logger.debug("Aggregated %d month(s)", len(summaries))
    return summaries
