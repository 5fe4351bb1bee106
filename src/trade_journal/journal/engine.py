"""One-call analytics over a snapshot of the trade collection.

Every metric is recomputed from scratch on each call; nothing is
cached between snapshots.  ``now`` is always passed in explicitly so
the same snapshot and instant always produce the same report.

Usage::

    report = build_report(raw_trades, now=WallClock().now(), timeframe="weekly")
    report.monthly[0].grade
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any

from ..core.enums import Session, Timeframe, coerce_enum
from .dashboard import DashboardSummary, dashboard_summary
from .direction import DirectionStats, direction_breakdown
from .equity import EquityCurveBuilder, EquityPoint, PeriodCard
from .normalizer import as_local, normalize_trades
from .periods import MonthlySummary, WeeklySummary, aggregate_monthly, aggregate_weekly
from .record import TradeRecord
from .session_analysis import TimeBucketAnalyzer, TimeBucketStats
from .streaks import StreakSummary, analyze_streaks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsReport:
    """Every derived metric for one snapshot."""

    generated_at: datetime
    timeframe: Timeframe
    trade_count: int       # records with a valid trade date
    skipped_count: int     # records left out for a missing/invalid trade date
    equity_curve: list[EquityPoint]
    period_cards: list[PeriodCard]
    directions: list[DirectionStats]
    time_buckets: list[TimeBucketStats]
    best_session: Session | None    # None until a bucket has enough trades
    worst_session: Session | None
    streaks: StreakSummary
    weekly: list[WeeklySummary]
    monthly: list[MonthlySummary]
    dashboard: DashboardSummary

    @property
    def total_pnl(self) -> float:
        """Cumulative P&L over the full history."""
        return sum(w.pnl for w in self.weekly)


def build_report(
    records: Iterable[Mapping[str, Any] | TradeRecord],
    *,
    now: datetime,
    timeframe: Timeframe | str = Timeframe.ALL,
    tz: tzinfo | None = None,
) -> AnalyticsReport:
    """Normalize ``records`` and run every analytics component over them."""
    tf = coerce_enum(Timeframe, timeframe, "timeframe")
    now = as_local(now, tz)

    records = list(records)
    trades = normalize_trades(records, tz)
    analyser = TimeBucketAnalyzer()
    time_buckets = analyser.analyze(trades)

    builder = EquityCurveBuilder()
    report = AnalyticsReport(
        generated_at=now,
        timeframe=tf,
        trade_count=len(trades),
        skipped_count=len(records) - len(trades),
        equity_curve=builder.build(trades, now=now, timeframe=tf),
        period_cards=builder.period_cards(trades, now=now),
        directions=direction_breakdown(trades),
        time_buckets=time_buckets,
        best_session=analyser.best_bucket(time_buckets),
        worst_session=analyser.worst_bucket(time_buckets),
        streaks=analyze_streaks(trades),
        weekly=aggregate_weekly(trades),
        monthly=aggregate_monthly(trades),
        dashboard=dashboard_summary(trades, now=now),
    )
    logger.debug(
        "Built report: trades=%d, weeks=%d, months=%d",
        report.trade_count, len(report.weekly), len(report.monthly),
    )
    return report
