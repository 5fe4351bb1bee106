"""Running win/loss accumulator shared by every breakdown.

Each breakdown (direction, session, week, month, dashboard) folds its
trades into one :class:`Tally` per bucket and derives its ratios from
it.  Zero denominators always yield 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import TradeResult
from .record import TradeRecord


def safe_div(numerator: float, denominator: float) -> float:
    """``numerator / denominator``, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


@dataclass
class Tally:
    """Accumulator for one bucket of trades."""

    trades: int = 0
    wins: int = 0
    losses: int = 0
    gross_gain: float = 0.0        # sum of winners' gainLoss
    gross_loss: float = 0.0        # sum of |losers' gainLoss|
    win_percent: float = 0.0       # sum of winners' positive pnlPercent
    loss_percent_abs: float = 0.0  # sum of |losers' negative pnlPercent|
    fees: float = 0.0
    pnl: float = 0.0               # net gainLoss, every recorded trade
    pnl_percent: float = 0.0       # net pnlPercent, every recorded trade

    def record(self, trade: TradeRecord) -> None:
        self.trades += 1
        if trade.result == TradeResult.WIN:
            self.wins += 1
            self.gross_gain += trade.gain_loss
            self.win_percent += max(0.0, trade.pnl_percent)
        elif trade.result == TradeResult.LOSS:
            self.losses += 1
            self.gross_loss += abs(trade.gain_loss)
            self.loss_percent_abs += abs(min(0.0, trade.pnl_percent))
        self.fees += trade.fee
        self.pnl += trade.gain_loss
        self.pnl_percent += trade.pnl_percent

    @property
    def closed(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Wins as a percentage of closed trades (0-100)."""
        return safe_div(self.wins, self.closed) * 100

    @property
    def avg_pnl_percent(self) -> float:
        return safe_div(self.pnl_percent, self.trades)

    @property
    def avg_gain(self) -> float:
        return safe_div(self.gross_gain, self.wins)

    @property
    def avg_loss(self) -> float:
        """Average losing trade in currency, as a positive number."""
        return safe_div(self.gross_loss, self.losses)

    @property
    def currency_profit_factor(self) -> float:
        return safe_div(self.gross_gain, self.gross_loss)

    @property
    def currency_expectancy(self) -> float:
        """Per-trade expectancy in currency, re-expressed as % of avg loss.

        ``(p * avgWin - (1 - p) * avgLoss) / avgLoss * 100``; 0.0 when
        there are no closed trades or no losses.
        """
        if self.closed == 0:
            return 0.0
        p = self.win_rate / 100
        raw = p * self.avg_gain - (1 - p) * self.avg_loss
        return safe_div(raw, self.avg_loss) * 100
