"""Consecutive win / loss streaks over closed trades."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.enums import TradeResult
from .record import TradeRecord, closed_trades


@dataclass(frozen=True)
class StreakSummary:
    max_win_streak: int = 0
    max_loss_streak: int = 0
    current_type: TradeResult | None = None  # None when there are no closed trades
    current_length: int = 0


def analyze_streaks(trades: Iterable[TradeRecord]) -> StreakSummary:
    """Longest win run, longest loss run, and the run in progress.

    Trades are walked oldest first; records sharing a ``trade_date``
    keep their input order.
    """
    ordered = sorted(closed_trades(trades), key=lambda t: t.trade_date)

    best = {TradeResult.WIN: 0, TradeResult.LOSS: 0}
    run_type: TradeResult | None = None
    run_length = 0

    for trade in ordered:
        if trade.result == run_type:
            run_length += 1
        else:
            run_type = trade.result
            run_length = 1
        if run_length > best[run_type]:
            best[run_type] = run_length

    return StreakSummary(
        max_win_streak=best[TradeResult.WIN],
        max_loss_streak=best[TradeResult.LOSS],
        current_type=run_type,
        current_length=run_length,
    )
