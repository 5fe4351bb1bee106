"""Win rate and P&L split by trade direction."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.enums import Direction
from .record import TradeRecord, closed_trades
from .tally import Tally


@dataclass(frozen=True)
class DirectionStats:
    direction: Direction
    wins: int
    losses: int
    win_rate: float
    total_pnl: float
    avg_pnl_percent: float

    @property
    def trades(self) -> int:
        return self.wins + self.losses


def direction_breakdown(trades: Iterable[TradeRecord]) -> list[DirectionStats]:
    """Long and short stats over closed trades, always both buckets.

    Trades with an unknown direction are left out.
    """
    tallies = {d: Tally() for d in Direction}
    for trade in closed_trades(trades):
        if trade.direction in tallies:
            tallies[trade.direction].record(trade)

    return [
        DirectionStats(
            direction=d,
            wins=t.wins,
            losses=t.losses,
            win_rate=t.win_rate,
            total_pnl=t.pnl,
            avg_pnl_percent=t.avg_pnl_percent,
        )
        for d, t in tallies.items()
    ]
