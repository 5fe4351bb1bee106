"""Shared factories for journal tests."""

from __future__ import annotations

from datetime import datetime
from itertools import count

from trade_journal.core.enums import Direction, TradeResult
from trade_journal.journal.record import TradeRecord

_ids = count(1)


def make_trade(
    result: str | None = "win",
    *,
    direction: str | None = "long",
    gain_loss: float = 10.0,
    pnl_percent: float = 5.0,
    fee: float = 1.0,
    trade_date: datetime | None = datetime(2026, 1, 14, 10, 0, 0),
    ticker: str = "BTC",
    **kwargs,
) -> TradeRecord:
    """Create a canonical TradeRecord."""
    return TradeRecord(
        id=kwargs.pop("id", f"t{next(_ids)}"),
        ticker=ticker,
        direction=Direction(direction) if direction else None,
        result=TradeResult(result) if result else None,
        entry_price=kwargs.pop("entry_price", 100.0),
        exit_price=kwargs.pop("exit_price", 105.0),
        leverage=kwargs.pop("leverage", 25.0),
        gain_loss=gain_loss,
        fee=fee,
        pnl_percent=pnl_percent,
        trade_date=trade_date,
        **kwargs,
    )


def make_raw(**overrides) -> dict:
    """Create a stored (camelCase) trade mapping."""
    raw = {
        "id": "raw1",
        "ticker": "ETH - Dec",
        "direction": "long",
        "result": "win",
        "entryPrice": 2772,
        "exitPrice": 2805,
        "leverage": 25,
        "gainLoss": 14.26,
        "fee": 1.10,
        "pnlPercent": 29.76,
        "comment": "",
        "tradeDate": "2026-01-29T14:35:00",
        "chartImageUrl": "",
        "createdAt": "2026-01-29T15:00:00",
    }
    raw.update(overrides)
    return raw
