"""Trade journal analytics.

Turns a flat, unordered snapshot of logged trades into performance
metrics.  Every component is a pure function of the snapshot (plus an
explicit ``now`` where a metric is relative to the current time).

Key components
--------------
TradeRecord           Canonical, immutable trade
normalize_trades      Raw stored records -> TradeRecord (drops undated)
EquityCurveBuilder    Cumulative P&L curve and period P&L% cards
direction_breakdown   Long vs short win rate and P&L
TimeBucketAnalyzer    Overnight / morning / afternoon / evening stats
analyze_streaks       Longest and current win/loss runs
aggregate_weekly      Monday-Sunday currency tracker
aggregate_monthly     Calendar-month P&L% tracker with letter grades
grade_month           Weighted monthly scoring
dashboard_summary     Current-month headline metrics
recent_trades         Filtered, display-ordered trade list
build_report          All of the above in one call
load_trades           JSON/CSV trade files
TradeExporter         CSV/JSON export of trades and reports
"""

from .record import TradeRecord, compute_pnl_percent, infer_result
from .normalizer import normalize_record, normalize_trades, parse_trade_timestamp
from .equity import EquityCurveBuilder, EquityPoint, PeriodCard
from .direction import DirectionStats, direction_breakdown
from .session_analysis import TimeBucketAnalyzer, TimeBucketStats
from .streaks import StreakSummary, analyze_streaks
from .periods import (
    MonthKey,
    MonthlySummary,
    WeekKey,
    WeeklySummary,
    aggregate_monthly,
    aggregate_weekly,
)
from .grading import GradeResult, grade_month
from .dashboard import DashboardSummary, dashboard_summary
from .recent import recent_trades
from .engine import AnalyticsReport, build_report
from .loader import load_trades
from .export import TradeExporter

__all__ = [
    "TradeRecord",
    "compute_pnl_percent",
    "infer_result",
    "normalize_record",
    "normalize_trades",
    "parse_trade_timestamp",
    "EquityCurveBuilder",
    "EquityPoint",
    "PeriodCard",
    "DirectionStats",
    "direction_breakdown",
    "TimeBucketAnalyzer",
    "TimeBucketStats",
    "StreakSummary",
    "analyze_streaks",
    "MonthKey",
    "MonthlySummary",
    "WeekKey",
    "WeeklySummary",
    "aggregate_monthly",
    "aggregate_weekly",
    "GradeResult",
    "grade_month",
    "DashboardSummary",
    "dashboard_summary",
    "recent_trades",
    "AnalyticsReport",
    "build_report",
    "load_trades",
    "TradeExporter",
]
