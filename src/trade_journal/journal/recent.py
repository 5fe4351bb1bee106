"""Recent-trades list: period filter, text search and display order.

This is the only place ``created_at`` matters: trades logged with the
same ``trade_date`` are shown most-recently-logged first, then by id.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from ..core.enums import RecentPeriod, coerce_enum
from .record import TradeRecord

_EARLIEST = datetime.min


def display_key(trade: TradeRecord) -> tuple[datetime, datetime, str]:
    """Sort key for newest-first display (use with ``reverse=True``)."""
    return (
        trade.trade_date or _EARLIEST,
        trade.created_at or _EARLIEST,
        trade.id,
    )


def matches_search(trade: TradeRecord, search: str) -> bool:
    """Case-insensitive substring match on ticker or comment."""
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in trade.ticker.lower() or needle in trade.comment.lower()


def in_recent_period(trade: TradeRecord, period: RecentPeriod, now: datetime) -> bool:
    if period == RecentPeriod.ALL:
        return True
    d = trade.trade_date
    if d is None:
        return False
    if period == RecentPeriod.TODAY:
        return d.date() == now.date()
    if period == RecentPeriod.WEEK:
        return d >= now - timedelta(days=7)
    return d.year == now.year and d.month == now.month


def recent_trades(
    trades: Iterable[TradeRecord],
    *,
    now: datetime,
    period: RecentPeriod | str = RecentPeriod.TODAY,
    search: str = "",
) -> list[TradeRecord]:
    """Trades matching ``period`` and ``search``, newest first."""
    p = coerce_enum(RecentPeriod, period, "recent period")
    selected = [
        t for t in trades
        if matches_search(t, search) and in_recent_period(t, p, now)
    ]
    selected.sort(key=display_key, reverse=True)
    return selected
