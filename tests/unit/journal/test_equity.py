"""Tests for EquityCurveBuilder: cumulative curve, timeframe windows, period cards."""

import pytest
from datetime import datetime

from trade_journal.core.enums import CardPeriod, Timeframe
from trade_journal.core.errors import UnknownPeriodError
from trade_journal.journal.equity import (
    EquityCurveBuilder,
    subtract_months,
    window_start,
)

from .conftest import make_trade


@pytest.fixture
def builder():
    return EquityCurveBuilder()


@pytest.fixture
def history():
    """Unordered history; ``now`` is 2026-01-14 15:00."""
    return [
        make_trade("win", id="c", gain_loss=20.0, pnl_percent=4.0,
                   trade_date=datetime(2026, 1, 10, 12, 0)),
        make_trade("win", id="a", gain_loss=100.0, pnl_percent=10.0,
                   trade_date=datetime(2025, 12, 1, 10, 0)),
        make_trade("win", id="x", gain_loss=1000.0, pnl_percent=99.0, trade_date=None),
        make_trade("win", id="d", gain_loss=5.0, pnl_percent=2.0,
                   trade_date=datetime(2026, 1, 14, 9, 0)),
        make_trade("loss", id="b", gain_loss=-30.0, pnl_percent=-5.0,
                   trade_date=datetime(2026, 1, 1, 9, 0)),
    ]


class TestFullCurve:
    def test_sorted_and_cumulative(self, builder, history, now):
        points = builder.build(history, now=now)
        assert [p.trade_id for p in points] == ["a", "b", "c", "d"]
        assert [p.cumulative_pnl for p in points] == [100.0, 70.0, 90.0, 95.0]
        assert [p.pnl_percent for p in points] == [10.0, -5.0, 4.0, 2.0]

    def test_last_point_equals_total(self, builder, history, now):
        points = builder.build(history, now=now)
        assert points[-1].cumulative_pnl == pytest.approx(
            sum(t.gain_loss for t in history if t.trade_date is not None)
        )

    def test_empty(self, builder, now):
        assert builder.build([], now=now) == []
        assert builder.build([make_trade(trade_date=None)], now=now) == []


class TestTimeframeWindow:
    def test_weekly_keeps_full_history_cumulative(self, builder, history, now):
        points = builder.build(history, now=now, timeframe=Timeframe.WEEKLY)
        assert [p.trade_id for p in points] == ["c", "d"]
        # Cumulative sum is never reset by the window
        assert [p.cumulative_pnl for p in points] == [90.0, 95.0]

    def test_daily(self, builder, history, now):
        points = builder.build(history, now=now, timeframe="daily")
        assert [p.trade_id for p in points] == ["d"]
        assert points[0].cumulative_pnl == 95.0

    def test_monthly_is_one_calendar_month(self, builder, history, now):
        points = builder.build(history, now=now, timeframe="monthly")
        assert [p.trade_id for p in points] == ["b", "c", "d"]

    def test_all(self, builder, history, now):
        assert len(builder.build(history, now=now, timeframe="all")) == 4

    def test_unknown_timeframe_raises(self, builder, history, now):
        with pytest.raises(UnknownPeriodError, match="timeframe"):
            builder.build(history, now=now, timeframe="hourly")

    def test_window_start(self, now):
        assert window_start(Timeframe.ALL, now) is None
        assert window_start(Timeframe.DAILY, now) == datetime(2026, 1, 13, 15, 0)
        assert window_start(Timeframe.WEEKLY, now) == datetime(2026, 1, 7, 15, 0)
        assert window_start(Timeframe.MONTHLY, now) == datetime(2025, 12, 14, 15, 0)


class TestSubtractMonths:
    def test_across_year(self):
        assert subtract_months(datetime(2026, 1, 15, 8), 1) == datetime(2025, 12, 15, 8)

    def test_clamps_to_month_end(self):
        assert subtract_months(datetime(2026, 3, 31), 1) == datetime(2026, 2, 28)
        assert subtract_months(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)


class TestPeriodCards:
    def test_cards(self, builder, history, now):
        cards = {c.period: c for c in builder.period_cards(history, now=now)}
        assert list(cards) == [CardPeriod.DAY, CardPeriod.WEEK, CardPeriod.MONTH, CardPeriod.YEAR]

        assert cards[CardPeriod.DAY].pnl_percent == pytest.approx(2.0)
        assert cards[CardPeriod.DAY].trade_count == 1
        assert cards[CardPeriod.WEEK].pnl_percent == pytest.approx(6.0)
        assert cards[CardPeriod.WEEK].trade_count == 2
        assert cards[CardPeriod.MONTH].pnl_percent == pytest.approx(1.0)
        assert cards[CardPeriod.MONTH].trade_count == 3
        assert cards[CardPeriod.YEAR].pnl_percent == pytest.approx(1.0)
        assert cards[CardPeriod.YEAR].trade_count == 3

    def test_day_is_calendar_date_week_is_trailing(self, builder, now):
        later_today = make_trade(pnl_percent=7.0, trade_date=datetime(2026, 1, 14, 18, 0))
        day = builder.period_card([later_today], CardPeriod.DAY, now=now)
        week = builder.period_card([later_today], CardPeriod.WEEK, now=now)
        assert day.trade_count == 1
        assert week.trade_count == 0

    def test_week_boundary_inclusive(self, builder, now):
        edge = make_trade(pnl_percent=3.0, trade_date=datetime(2026, 1, 7, 15, 0))
        assert builder.period_card([edge], "week", now=now).trade_count == 1

    def test_month_is_calendar_not_trailing(self, builder, now):
        december = make_trade(trade_date=datetime(2025, 12, 31, 23, 0))
        assert builder.period_card([december], "month", now=now).trade_count == 0
        assert builder.period_card([december], "year", now=now).trade_count == 0

    def test_empty(self, builder, now):
        cards = builder.period_cards([], now=now)
        assert len(cards) == 4
        assert all(c.pnl_percent == 0.0 and c.trade_count == 0 for c in cards)

    def test_unknown_period_raises(self, builder, now):
        with pytest.raises(UnknownPeriodError):
            builder.period_card([], "quarter", now=now)
