"""Equity curve and period P&L% cards.

The curve is the running sum of ``gainLoss`` over every dated trade in
chronological order.  A timeframe only narrows which points are
visible; cumulative values always come from the full history, so the
first visible point of a ``weekly`` curve still carries everything
earned before that week.

Usage::

    builder = EquityCurveBuilder()
    points = builder.build(trades, now=clock.now(), timeframe="weekly")
    cards = builder.period_cards(trades, now=clock.now())
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.enums import CardPeriod, Timeframe, coerce_enum
from .record import TradeRecord, dated_trades

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquityPoint:
    """One trade on the equity curve."""

    trade_date: datetime
    cumulative_pnl: float
    gain_loss: float
    pnl_percent: float
    ticker: str = ""
    trade_id: str = ""


@dataclass(frozen=True)
class PeriodCard:
    """Sum of P&L% over one day / week / month / year."""

    period: CardPeriod
    pnl_percent: float
    trade_count: int


def subtract_months(dt: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the month's end."""
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def window_start(timeframe: Timeframe | str, now: datetime) -> datetime | None:
    """Earliest visible instant for ``timeframe``; ``None`` means unbounded."""
    tf = coerce_enum(Timeframe, timeframe, "timeframe")
    if tf == Timeframe.DAILY:
        return now - timedelta(days=1)
    if tf == Timeframe.WEEKLY:
        return now - timedelta(days=7)
    if tf == Timeframe.MONTHLY:
        return subtract_months(now, 1)
    return None


def card_filter(period: CardPeriod | str, now: datetime) -> Callable[[datetime], bool]:
    """Membership test for a period card relative to ``now``.

    ``day`` is the calendar date of ``now``, ``week`` the trailing seven
    days up to ``now`` inclusive, ``month``/``year`` the calendar month
    and year of ``now``.
    """
    p = coerce_enum(CardPeriod, period, "period")
    if p == CardPeriod.DAY:
        today = now.date()
        return lambda d: d.date() == today
    if p == CardPeriod.WEEK:
        week_ago = now - timedelta(days=7)
        return lambda d: week_ago <= d <= now
    if p == CardPeriod.MONTH:
        return lambda d: d.year == now.year and d.month == now.month
    return lambda d: d.year == now.year


class EquityCurveBuilder:
    """Cumulative P&L series and period P&L% summaries."""

    def full_curve(self, trades: Iterable[TradeRecord]) -> list[EquityPoint]:
        """Every dated trade, oldest first, with a running P&L total."""
        ordered = sorted(dated_trades(trades), key=lambda t: t.trade_date)
        points: list[EquityPoint] = []
        cumulative = 0.0
        for trade in ordered:
            cumulative += trade.gain_loss
            points.append(EquityPoint(
                trade_date=trade.trade_date,
                cumulative_pnl=cumulative,
                gain_loss=trade.gain_loss,
                pnl_percent=trade.pnl_percent,
                ticker=trade.ticker,
                trade_id=trade.id,
            ))
        return points

    def build(
        self,
        trades: Iterable[TradeRecord],
        *,
        now: datetime,
        timeframe: Timeframe | str = Timeframe.ALL,
    ) -> list[EquityPoint]:
        """Equity curve restricted to the points visible in ``timeframe``."""
        start = window_start(timeframe, now)
        points = self.full_curve(trades)
        if start is None:
            return points
        return [p for p in points if p.trade_date >= start]

    def period_card(
        self,
        trades: Iterable[TradeRecord],
        period: CardPeriod | str,
        *,
        now: datetime,
    ) -> PeriodCard:
        in_period = card_filter(period, now)
        total = 0.0
        count = 0
        for trade in dated_trades(trades):
            if in_period(trade.trade_date):
                total += trade.pnl_percent
                count += 1
        return PeriodCard(
            period=coerce_enum(CardPeriod, period, "period"),
            pnl_percent=total,
            trade_count=count,
        )

    def period_cards(
        self,
        trades: Iterable[TradeRecord],
        *,
        now: datetime,
    ) -> list[PeriodCard]:
        """Day, week, month and year cards, in that order."""
        trades = list(trades)
        return [self.period_card(trades, p, now=now) for p in CardPeriod]
