"""Load stored trades from JSON or CSV files.

JSON files hold either a list of trade objects or an object with a
``trades`` list.  CSV files use the stored field names as headers; empty
cells count as missing.  Repeated trades (same :attr:`TradeRecord.signature`)
are dropped so re-imported exports do not double count.

Usage::

    trades = load_trades("exports/january.json")
    report = build_report(trades, now=clock.now())
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from datetime import tzinfo
from pathlib import Path
from typing import Any

from ..core.errors import TradeFileError
from .normalizer import normalize_record
from .record import TradeRecord

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".csv")


def read_raw_trades(path: str | Path) -> list[dict[str, Any]]:
    """Read stored trade mappings without interpreting any field."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TradeFileError(str(path), f"unsupported file type '{suffix}'")

    try:
        with open(path, encoding="utf-8", newline="") as f:
            if suffix == ".csv":
                return [
                    {k: (v if v != "" else None) for k, v in row.items()}
                    for row in csv.DictReader(f)
                ]
            payload = json.load(f)
    except OSError as exc:
        raise TradeFileError(str(path), exc.strerror or str(exc)) from exc
    except (json.JSONDecodeError, csv.Error, UnicodeDecodeError) as exc:
        raise TradeFileError(str(path), str(exc)) from exc

    if isinstance(payload, dict):
        payload = payload.get("trades")
    if not isinstance(payload, list):
        raise TradeFileError(str(path), "expected a list of trades")
    return [row for row in payload if isinstance(row, dict)]


def deduplicate(trades: Iterable[TradeRecord]) -> tuple[list[TradeRecord], int]:
    """Keep the first record per signature.  Returns ``(kept, skipped)``."""
    seen: set[str] = set()
    kept: list[TradeRecord] = []
    skipped = 0
    for trade in trades:
        sig = trade.signature
        if sig in seen:
            skipped += 1
            continue
        seen.add(sig)
        kept.append(trade)
    return kept, skipped


def load_trades(
    path: str | Path,
    *,
    tz: tzinfo | None = None,
    dedupe: bool = True,
) -> list[TradeRecord]:
    """Read and normalize a trade file.

    Records without a valid trade date are kept here; the analytics
    ignore them.
    """
    raws = read_raw_trades(path)
    trades = [normalize_record(raw, tz) for raw in raws]
    skipped = 0
    if dedupe:
        trades, skipped = deduplicate(trades)
    logger.info(
        "Loaded trades from %s: kept=%d, duplicates=%d, rows=%d",
        path, len(trades), skipped, len(raws),
    )
    return trades
