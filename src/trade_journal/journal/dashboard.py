"""Current-month headline metrics for the dashboard.

Uses the same currency-based definitions as the weekly tracker: win
rate over closed trades, profit factor as gross gain over gross loss,
and expectancy expressed as a percentage of the average loss.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from .periods import MonthKey
from .record import TradeRecord, dated_trades
from .tally import Tally


@dataclass(frozen=True)
class DashboardSummary:
    month: MonthKey
    trade_count: int
    wins: int
    losses: int
    total_pnl: float
    win_rate: float
    expectancy: float
    profit_factor: float


def dashboard_summary(trades: Iterable[TradeRecord], *, now: datetime) -> DashboardSummary:
    """Headline metrics for the calendar month containing ``now``."""
    month = MonthKey.for_date(now)
    tally = Tally()
    for trade in dated_trades(trades):
        if MonthKey.for_date(trade.trade_date) == month:
            tally.record(trade)

    return DashboardSummary(
        month=month,
        trade_count=tally.trades,
        wins=tally.wins,
        losses=tally.losses,
        total_pnl=tally.pnl,
        win_rate=tally.win_rate,
        expectancy=tally.currency_expectancy,
        profit_factor=tally.currency_profit_factor,
    )
