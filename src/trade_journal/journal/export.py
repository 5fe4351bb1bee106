"""Trade and report export: CSV/JSON output.

Trades are written with their stored field names so an export can be
loaded back with :func:`trade_journal.journal.loader.load_trades`.
Reports are flattened into JSON-ready dicts for the presentation layer.

Usage::

    exporter = TradeExporter()
    csv_str = exporter.to_csv(trades)
    json_str = exporter.to_json(trades)
    payload = exporter.report_to_dict(report)
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from .engine import AnalyticsReport
from .record import FIELD_NAMES, TradeRecord


# Stored field names plus the derived price-implied return
_CSV_COLUMNS = list(FIELD_NAMES.values()) + ["impliedPnlPercent"]


class TradeExporter:
    """Export trades to CSV/JSON and reports to plain dicts.

    Parameters
    ----------
    decimal_places : int
        Rounding precision for derived numeric fields.  Default 4.
    """

    def __init__(self, *, decimal_places: int = 4) -> None:
        self._dp = decimal_places

    # ------------------------------------------------------------------ #
    # Trades                                                               #
    # ------------------------------------------------------------------ #

    def to_csv(
        self,
        trades: list[TradeRecord],
        *,
        columns: list[str] | None = None,
    ) -> str:
        """Export trades as a CSV string with a header row."""
        cols = columns or _CSV_COLUMNS
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()

        for trade in trades:
            row = self._trade_to_row(trade)
            writer.writerow({c: "" if row.get(c) is None else row[c] for c in cols})

        return buf.getvalue()

    def to_json(self, trades: list[TradeRecord], *, indent: int = 2) -> str:
        """Export trades as a JSON list."""
        rows = [self._trade_to_row(t) for t in trades]
        return json.dumps(rows, indent=indent, default=str)

    # ------------------------------------------------------------------ #
    # Report                                                               #
    # ------------------------------------------------------------------ #

    def report_to_dict(self, report: AnalyticsReport) -> dict[str, Any]:
        """Flatten an :class:`AnalyticsReport` into JSON-ready values."""
        r = self._round
        return {
            "generatedAt": report.generated_at.isoformat(),
            "timeframe": report.timeframe.value,
            "tradeCount": report.trade_count,
            "skippedCount": report.skipped_count,
            "equityCurve": [
                {
                    "date": p.trade_date.isoformat(),
                    "pnl": r(p.cumulative_pnl),
                    "pnlPercent": r(p.pnl_percent),
                    "ticker": p.ticker,
                }
                for p in report.equity_curve
            ],
            "periodCards": {
                c.period.value: {"pnlPercent": r(c.pnl_percent), "trades": c.trade_count}
                for c in report.period_cards
            },
            "directions": [
                {
                    "direction": d.direction.value,
                    "wins": d.wins,
                    "losses": d.losses,
                    "winRate": r(d.win_rate),
                    "totalPnl": r(d.total_pnl),
                    "avgPnlPercent": r(d.avg_pnl_percent),
                }
                for d in report.directions
            ],
            "timeBuckets": [
                {
                    "session": b.session.value,
                    "hours": [b.start_hour, b.end_hour - 1],
                    "trades": b.trades,
                    "wins": b.wins,
                    "losses": b.losses,
                    "winRate": r(b.win_rate),
                    "totalPnl": r(b.total_pnl),
                    "avgPnlPercent": r(b.avg_pnl_percent),
                }
                for b in report.time_buckets
            ],
            "bestSession": report.best_session.value if report.best_session else None,
            "worstSession": report.worst_session.value if report.worst_session else None,
            "streaks": {
                "maxWinStreak": report.streaks.max_win_streak,
                "maxLossStreak": report.streaks.max_loss_streak,
                "currentType": (
                    report.streaks.current_type.value
                    if report.streaks.current_type else None
                ),
                "currentLength": report.streaks.current_length,
            },
            "weekly": [
                {
                    "weekStart": str(w.key),
                    "weekLabel": w.label,
                    "trades": w.trade_count,
                    "wins": w.wins,
                    "losses": w.losses,
                    "totalGain": r(w.total_gain),
                    "totalLoss": r(w.total_loss),
                    "fees": r(w.fees),
                    "pnl": r(w.pnl),
                    "winRate": r(w.win_rate),
                    "avgWin": r(w.avg_win),
                    "avgLoss": r(w.avg_loss),
                    "expectancy": r(w.expectancy),
                    "profitFactor": r(w.profit_factor),
                    "pnlPercent": r(w.pnl_percent),
                }
                for w in report.weekly
            ],
            "monthly": [
                {
                    "monthYear": str(m.key),
                    "monthLabel": m.label,
                    "totalTrades": m.closed_trades,
                    "wins": m.wins,
                    "losses": m.losses,
                    "totalPnl": r(m.total_pnl),
                    "monthlyPnlPercent": r(m.monthly_pnl_percent),
                    "winRate": r(m.win_rate),
                    "avgWin": r(m.avg_win),
                    "avgLoss": r(m.avg_loss),
                    "expectancy": r(m.expectancy),
                    "profitFactor": r(m.profit_factor),
                    "grade": m.grade.value,
                    "score": m.score,
                }
                for m in report.monthly
            ],
            "dashboard": {
                "month": str(report.dashboard.month),
                "trades": report.dashboard.trade_count,
                "wins": report.dashboard.wins,
                "losses": report.dashboard.losses,
                "totalPnl": r(report.dashboard.total_pnl),
                "winRate": r(report.dashboard.win_rate),
                "expectancy": r(report.dashboard.expectancy),
                "profitFactor": r(report.dashboard.profit_factor),
            },
        }

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _round(self, value: float) -> float:
        return round(value, self._dp)

    def _trade_to_row(self, trade: TradeRecord) -> dict[str, Any]:
        row = trade.to_dict()
        row["impliedPnlPercent"] = self._round(trade.implied_pnl_percent)
        return row
