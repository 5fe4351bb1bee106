"""Time-of-day performance analysis.

Splits closed trades into four fixed hour-of-day buckets using the
local hour of ``tradeDate``.  Answers "am I better in the morning or
in the evening?".

Usage::

    analyser = TimeBucketAnalyzer()
    buckets = analyser.analyze(trades)
    best = analyser.best_bucket(buckets)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.enums import Session
from .record import TradeRecord, closed_trades
from .tally import Tally


# Local hours, inclusive start, exclusive end.  Covers 0-23 with no overlap.
SESSIONS: dict[Session, tuple[int, int]] = {
    Session.OVERNIGHT: (0, 6),
    Session.MORNING: (6, 12),
    Session.AFTERNOON: (12, 18),
    Session.EVENING: (18, 24),
}


def session_for_hour(hour: int) -> Session:
    """Bucket for a local hour (0-23)."""
    for session, (start_h, end_h) in SESSIONS.items():
        if start_h <= hour < end_h:
            return session
    raise ValueError(f"hour out of range: {hour}")


@dataclass(frozen=True)
class TimeBucketStats:
    session: Session
    start_hour: int
    end_hour: int  # exclusive
    trades: int
    wins: int
    losses: int
    win_rate: float
    total_pnl: float
    avg_pnl_percent: float


class TimeBucketAnalyzer:
    """Per-session stats over closed trades.

    Parameters
    ----------
    min_trades : int
        Minimum trades for a bucket to be considered by
        :meth:`best_bucket` / :meth:`worst_bucket`.  Default 3.
    """

    def __init__(self, *, min_trades: int = 3) -> None:
        self._min_trades = min_trades

    def analyze(self, trades: Iterable[TradeRecord]) -> list[TimeBucketStats]:
        """All four buckets in chronological order, empty ones included."""
        tallies = {s: Tally() for s in SESSIONS}
        for trade in closed_trades(trades):
            tallies[session_for_hour(trade.trade_date.hour)].record(trade)

        return [
            TimeBucketStats(
                session=session,
                start_hour=SESSIONS[session][0],
                end_hour=SESSIONS[session][1],
                trades=t.trades,
                wins=t.wins,
                losses=t.losses,
                win_rate=t.win_rate,
                total_pnl=t.pnl,
                avg_pnl_percent=t.avg_pnl_percent,
            )
            for session, t in tallies.items()
        ]

    def best_bucket(self, buckets: list[TimeBucketStats]) -> Session | None:
        """Highest win rate bucket with enough trades, else ``None``."""
        valid = [b for b in buckets if b.trades >= self._min_trades]
        if not valid:
            return None
        return max(valid, key=lambda b: (b.win_rate, b.total_pnl)).session

    def worst_bucket(self, buckets: list[TimeBucketStats]) -> Session | None:
        """Lowest win rate bucket with enough trades, else ``None``."""
        valid = [b for b in buckets if b.trades >= self._min_trades]
        if not valid:
            return None
        return min(valid, key=lambda b: (b.win_rate, b.total_pnl)).session
