"""Tests for the current-month dashboard metrics."""

import pytest
from datetime import datetime

from trade_journal.journal.dashboard import dashboard_summary
from trade_journal.journal.periods import MonthKey

from .conftest import make_trade


class TestDashboardSummary:
    def test_current_month_only(self, now):
        trades = [
            make_trade("win", gain_loss=15.0, trade_date=datetime(2026, 1, 2, 9)),
            make_trade("loss", gain_loss=-5.0, trade_date=datetime(2026, 1, 13, 9)),
            make_trade("win", gain_loss=100.0, trade_date=datetime(2025, 12, 31, 23)),
            make_trade(None, gain_loss=2.0, trade_date=datetime(2026, 1, 14, 9)),
        ]
        summary = dashboard_summary(trades, now=now)

        assert summary.month == MonthKey(2026, 1)
        assert summary.trade_count == 3
        assert summary.wins == 1
        assert summary.losses == 1
        assert summary.total_pnl == pytest.approx(12.0)
        assert summary.win_rate == pytest.approx(50.0)
        assert summary.profit_factor == pytest.approx(3.0)
        assert summary.expectancy == pytest.approx(100.0)

    def test_empty_month(self, now):
        summary = dashboard_summary(
            [make_trade(trade_date=datetime(2025, 6, 1, 9))], now=now,
        )
        assert summary.trade_count == 0
        assert summary.total_pnl == 0.0
        assert summary.win_rate == 0.0
        assert summary.expectancy == 0.0
        assert summary.profit_factor == 0.0

    def test_undated_trades_ignored(self, now):
        summary = dashboard_summary([make_trade(trade_date=None)], now=now)
        assert summary.trade_count == 0
