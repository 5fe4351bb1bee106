"""Tests for the one-call analytics report."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from trade_journal.core.enums import Grade, Session, Timeframe, TradeResult
from trade_journal.core.errors import UnknownPeriodError
from trade_journal.journal.engine import build_report

from .conftest import make_raw, make_trade


class TestBuildReport:
    def test_unreadable_dates_are_skipped_everywhere(self, now):
        raws = [
            make_raw(id="ok", tradeDate="2026-01-13T09:00:00"),
            make_raw(id="bad", tradeDate="not-a-date", gainLoss=1000),
        ]
        report = build_report(raws, now=now)

        assert report.trade_count == 1
        assert report.skipped_count == 1
        assert [p.trade_id for p in report.equity_curve] == ["ok"]
        assert report.total_pnl == pytest.approx(14.26)
        assert report.dashboard.total_pnl == pytest.approx(14.26)
        assert sum(b.trades for b in report.time_buckets) == 1

    @pytest.mark.parametrize(
        "trade_date",
        ["0001-01-01T00:00:00Z", "9999-12-31T23:59:59-05:00", 10**400, Decimal("sNaN")],
    )
    def test_out_of_range_date_is_skipped(self, now, trade_date):
        raws = [make_raw(id="ok"), make_raw(id="bad", tradeDate=trade_date)]
        report = build_report(raws, now=now, tz=ZoneInfo("America/New_York"))

        assert report.trade_count == 1
        assert report.skipped_count == 1
        assert [p.trade_id for p in report.equity_curve] == ["ok"]

    def test_empty_snapshot(self, now):
        report = build_report([], now=now)

        assert report.trade_count == 0
        assert report.equity_curve == []
        assert report.weekly == []
        assert report.monthly == []
        assert [c.trade_count for c in report.period_cards] == [0, 0, 0, 0]
        assert [d.trades for d in report.directions] == [0, 0]
        assert report.streaks.max_win_streak == 0
        assert report.streaks.current_type is None
        assert report.dashboard.trade_count == 0
        assert report.total_pnl == 0

    def test_timeframe_narrows_curve_only(self, now):
        trades = [
            make_trade(gain_loss=100.0, trade_date=datetime(2025, 11, 1, 9)),
            make_trade(gain_loss=5.0, trade_date=datetime(2026, 1, 13, 9)),
        ]
        report = build_report(trades, now=now, timeframe="weekly")

        assert report.timeframe == Timeframe.WEEKLY
        [point] = report.equity_curve
        assert point.cumulative_pnl == pytest.approx(105.0)
        assert len(report.monthly) == 2

    def test_accepts_canonical_records(self, now):
        report = build_report([make_trade("loss", gain_loss=-3.0)], now=now)
        assert report.streaks.current_type == TradeResult.LOSS
        assert report.monthly[0].grade in set(Grade)

    def test_aware_now_is_made_local(self):
        now = datetime(2026, 1, 14, 15, 0, tzinfo=timezone.utc)
        report = build_report([], now=now, tz=ZoneInfo("Asia/Tokyo"))
        assert report.generated_at == datetime(2026, 1, 15, 0, 0)

    def test_raw_dates_use_configured_zone(self):
        raw = make_raw(tradeDate="2026-01-13T23:30:00Z")
        report = build_report(
            [raw], now=datetime(2026, 1, 14, 12), tz=ZoneInfo("Asia/Tokyo"),
        )
        assert report.equity_curve[0].trade_date == datetime(2026, 1, 14, 8, 30)
        assert report.period_cards[0].trade_count == 1

    def test_best_and_worst_session(self, now):
        trades = [
            make_trade("win", trade_date=datetime(2026, 1, 12, 9)),
            make_trade("win", trade_date=datetime(2026, 1, 12, 10)),
            make_trade("win", trade_date=datetime(2026, 1, 13, 11)),
            make_trade("win", trade_date=datetime(2026, 1, 12, 14)),
            make_trade("loss", gain_loss=-4.0, trade_date=datetime(2026, 1, 12, 15)),
            make_trade("loss", gain_loss=-4.0, trade_date=datetime(2026, 1, 13, 16)),
        ]
        report = build_report(trades, now=now)
        assert report.best_session == Session.MORNING
        assert report.worst_session == Session.AFTERNOON

    def test_no_best_session_without_enough_trades(self, now):
        report = build_report([make_trade()], now=now)
        assert report.best_session is None
        assert report.worst_session is None

    def test_unknown_timeframe(self, now):
        with pytest.raises(UnknownPeriodError, match="timeframe"):
            build_report([], now=now, timeframe="hourly")

    def test_same_input_same_report(self, now):
        raws = [make_raw(id=str(i), gainLoss=i) for i in range(5)]
        assert build_report(raws, now=now) == build_report(raws, now=now)
