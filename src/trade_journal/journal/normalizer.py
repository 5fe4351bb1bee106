"""Raw-record normalizer.

Stored trades arrive as loosely typed mappings: numbers may be strings
or missing, ``tradeDate`` may be a datetime, a Firestore-style
``{"seconds": ..., "nanoseconds": ...}`` object, an epoch number or an
ISO-like string.  Everything downstream works on :class:`TradeRecord`
only, so all coercion happens here.

Records whose ``tradeDate`` cannot be read keep ``trade_date=None`` and
are dropped by :func:`normalize_trades`.  That is routine (an in-progress
entry) and is logged at DEBUG only.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal
from typing import Any

from ..core.enums import Direction, TradeResult
from .record import FIELD_NAMES, TradeRecord

logger = logging.getLogger(__name__)

# Epoch numbers above this are taken to be milliseconds.
_EPOCH_MS_THRESHOLD = 1e11


def as_local(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert ``dt`` to a naive wall-clock datetime.

    Aware values are converted into ``tz`` (system local zone when
    ``None``) before the zone is dropped.  Naive values are assumed to
    be local already.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)


def parse_trade_timestamp(raw: Any, tz: tzinfo | None = None) -> datetime | None:
    """Parse a stored timestamp into a naive local datetime.

    Returns ``None`` for anything missing or unreadable; never raises.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, datetime):
        return _to_local(raw, tz)

    if isinstance(raw, date):
        return datetime.combine(raw, time())

    if isinstance(raw, Mapping):
        seconds = raw.get("seconds", raw.get("_seconds"))
        if seconds is None:
            return None
        nanos = raw.get("nanoseconds", raw.get("_nanoseconds")) or 0
        try:
            epoch = float(seconds) + float(nanos) / 1e9
        except (TypeError, ValueError, OverflowError):
            return None
        return _from_epoch(epoch, tz)

    if isinstance(raw, (int, float, Decimal)):
        try:
            epoch = float(raw)
        except (ValueError, OverflowError):
            return None
        if abs(epoch) > _EPOCH_MS_THRESHOLD:
            epoch /= 1000.0
        return _from_epoch(epoch, tz)

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return _to_local(parsed, tz)

    return None


def _to_local(dt: datetime, tz: tzinfo | None) -> datetime | None:
    # Zone conversion can leave the datetime range (e.g. 0001-01-01Z).
    try:
        return as_local(dt, tz)
    except (OverflowError, OSError, ValueError):
        return None


def _from_epoch(epoch: float, tz: tzinfo | None) -> datetime | None:
    if not math.isfinite(epoch):
        return None
    try:
        utc = datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return _to_local(utc, tz)


def parse_number(raw: Any, default: float = 0.0) -> float:
    """Parse a numeric field, falling back to ``default``.

    Non-finite values (NaN, inf) count as unreadable.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            return default
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return default
    return value if math.isfinite(value) else default


def parse_optional_number(raw: Any) -> float | None:
    """Like :func:`parse_number` but ``None`` when absent or unreadable."""
    value = parse_number(raw, default=math.nan)
    return None if math.isnan(value) else value


def _parse_choice(raw: Any, enum_cls):
    if isinstance(raw, enum_cls):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        return None


def _text(raw: Any) -> str:
    return "" if raw is None else str(raw)


def normalize_record(
    raw: Mapping[str, Any] | TradeRecord,
    tz: tzinfo | None = None,
) -> TradeRecord:
    """Coerce one stored record into a :class:`TradeRecord`.

    Already-canonical records are returned unchanged.
    """
    if isinstance(raw, TradeRecord):
        return raw

    def field(name: str) -> Any:
        return raw.get(FIELD_NAMES[name])

    return TradeRecord(
        id=_text(field("id")),
        ticker=_text(field("ticker")),
        direction=_parse_choice(field("direction"), Direction),
        result=_parse_choice(field("result"), TradeResult),
        entry_price=parse_number(field("entry_price")),
        exit_price=parse_optional_number(field("exit_price")),
        leverage=parse_number(field("leverage")),
        gain_loss=parse_number(field("gain_loss")),
        fee=parse_number(field("fee")),
        pnl_percent=parse_number(field("pnl_percent")),
        trade_date=parse_trade_timestamp(field("trade_date"), tz),
        created_at=parse_trade_timestamp(field("created_at"), tz),
        comment=_text(field("comment")),
        chart_image_url=_text(field("chart_image_url")),
    )


def normalize_trades(
    raws: Iterable[Mapping[str, Any] | TradeRecord],
    tz: tzinfo | None = None,
) -> list[TradeRecord]:
    """Normalize a snapshot and keep only records with a valid trade date."""
    valid: list[TradeRecord] = []
    skipped = 0
    for raw in raws:
        record = normalize_record(raw, tz)
        if record.trade_date is None:
            skipped += 1
            continue
        valid.append(record)
    if skipped:
        logger.debug("Skipped %d trade(s) without a valid tradeDate", skipped)
    return valid
