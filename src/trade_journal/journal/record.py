"""Canonical trade record: the core data model.

A TradeRecord is one logged trade as the analytics engine sees it:
numbers already coerced, ``trade_date`` already parsed into a naive
local datetime (or ``None`` when the stored value was missing or
unreadable).  Records are frozen; the engine never mutates them.

Stored field names (``gainLoss``, ``pnlPercent``, ``tradeDate``, ...)
are preserved by :meth:`TradeRecord.to_dict` so exported data can be
fed back into the store unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Direction, TradeResult

# Canonical attribute -> stored field name
FIELD_NAMES: dict[str, str] = {
    "id": "id",
    "ticker": "ticker",
    "direction": "direction",
    "result": "result",
    "entry_price": "entryPrice",
    "exit_price": "exitPrice",
    "leverage": "leverage",
    "gain_loss": "gainLoss",
    "fee": "fee",
    "pnl_percent": "pnlPercent",
    "comment": "comment",
    "trade_date": "tradeDate",
    "chart_image_url": "chartImageUrl",
    "created_at": "createdAt",
}


def compute_pnl_percent(
    direction: Direction | str | None,
    entry_price: float | None,
    exit_price: float | None,
    leverage: float | None = 1.0,
) -> float:
    """Leveraged percentage return implied by entry/exit prices.

    Long: ``(exit - entry) / entry * 100 * leverage``; short inverts the
    sign of the price delta.  A missing or zero leverage counts as 1x.
    Returns 0.0 when either price is missing or the entry is zero.
    """
    if not entry_price or exit_price is None:
        return 0.0
    lev = leverage or 1.0
    delta = exit_price - entry_price
    if direction == Direction.SHORT or direction == "short":
        delta = -delta
    return delta / entry_price * 100 * lev


def infer_result(pnl_percent: float) -> TradeResult | None:
    """Win for a positive return, loss for a negative one, else undecided."""
    if pnl_percent > 0:
        return TradeResult.WIN
    if pnl_percent < 0:
        return TradeResult.LOSS
    return None


@dataclass(frozen=True)
class TradeRecord:
    """One logged trade in canonical form.

    Parameters
    ----------
    id : str
        Storage-assigned identifier.
    direction : Direction | None
        ``None`` when the stored value is not ``long``/``short``.
    result : TradeResult | None
        ``None`` for an open / unresolved trade.
    trade_date : datetime | None
        When the trade happened (naive, local).  ``None`` excludes the
        record from every aggregate.
    created_at : datetime | None
        When the record was logged.  Display tie-break only.
    """

    id: str = ""
    ticker: str = ""
    direction: Direction | None = None
    result: TradeResult | None = None
    entry_price: float = 0.0
    exit_price: float | None = None
    leverage: float = 0.0
    gain_loss: float = 0.0
    fee: float = 0.0
    pnl_percent: float = 0.0
    trade_date: datetime | None = None
    created_at: datetime | None = None
    comment: str = ""
    chart_image_url: str = ""

    @property
    def has_valid_date(self) -> bool:
        return self.trade_date is not None

    @property
    def is_closed(self) -> bool:
        """True for a win or a loss."""
        return self.result in (TradeResult.WIN, TradeResult.LOSS)

    @property
    def implied_pnl_percent(self) -> float:
        """P&L% recomputed from prices, direction and leverage."""
        return compute_pnl_percent(
            self.direction, self.entry_price, self.exit_price, self.leverage
        )

    @property
    def signature(self) -> str:
        """Content fingerprint used to spot the same trade logged twice."""
        return "|".join([
            self.ticker,
            self.direction.value if self.direction else "",
            self.result.value if self.result else "",
            repr(self.entry_price),
            repr(self.exit_price),
            repr(self.leverage),
            f"{self.gain_loss:.2f}",
            f"{self.fee:.2f}",
            f"{self.pnl_percent:.2f}",
            self.trade_date.isoformat() if self.trade_date else "",
        ])

    def to_dict(self) -> dict:
        """Export using the stored field names."""
        return {
            "id": self.id,
            "ticker": self.ticker,
            "direction": self.direction.value if self.direction else None,
            "result": self.result.value if self.result else None,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "leverage": self.leverage,
            "gainLoss": self.gain_loss,
            "fee": self.fee,
            "pnlPercent": self.pnl_percent,
            "comment": self.comment,
            "tradeDate": self.trade_date.isoformat() if self.trade_date else None,
            "chartImageUrl": self.chart_image_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def dated_trades(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Drop records without a usable ``trade_date``."""
    return [t for t in trades if t.trade_date is not None]


def closed_trades(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Dated records whose result is a win or a loss."""
    return [t for t in trades if t.trade_date is not None and t.is_closed]
