"""Tests for chart and card series.

**Feature: prop-journal**
"""

from datetime import date

from hypothesis import given, settings
from hypothesis import strategies as st

from propjournal.models import JournalEntry
from propjournal.stats.engine import compute_stats
from propjournal.stats.series import (
    cumulative_series,
    daily_bars,
    days_until_summer,
    gradient_offset,
    is_goal_reached,
    payout_series,
    recent_activity,
    remaining_to_goal,
)


def trade(pnl, day, entry_id=None):
    return JournalEntry(id=entry_id or f"t{day}-{pnl}", date=date(2024, 3, day), pnl=pnl)


def payout(amount, day):
    return JournalEntry(
        id=f"p{day}-{amount}",
        date=date(2024, 3, day),
        is_payout=True,
        payout_amount=amount,
    )


class TestCumulativeSeries:

    def test_running_total_in_date_order(self):
        entries = [trade(50, 3), payout(1000, 2), trade(-20, 1), trade(100, 2)]

        series = cumulative_series(entries)

        assert [p["date"].day for p in series] == [1, 2, 3]
        assert [p["value"] for p in series] == [-20, 80, 130]
        assert [p["daily"] for p in series] == [-20, 100, 50]

    @given(pnls=st.lists(st.integers(min_value=-1000, max_value=1000), min_size=1, max_size=28))
    @settings(max_examples=50)
    def test_last_point_is_cumulative_pnl(self, pnls):
        entries = [trade(float(p), i + 1) for i, p in enumerate(pnls)]

        series = cumulative_series(entries)

        assert series[-1]["value"] == compute_stats(entries).cumulative_pnl


class TestPayoutSeries:

    def test_running_payouts(self):
        entries = [payout(500, 5), trade(100, 1), payout(1500, 2)]

        series = payout_series(entries)

        assert [p["amount"] for p in series] == [1500, 500]
        assert [p["value"] for p in series] == [1500, 2000]

    def test_no_payouts(self):
        assert payout_series([trade(1, 1)]) == []


class TestBarsAndActivity:

    def test_daily_bars_keeps_latest_days(self):
        entries = [trade(float(d), d) for d in range(20, 0, -1)]

        bars = daily_bars(entries, limit=14)

        assert [e.date.day for e in bars] == list(range(7, 21))

    def test_daily_bars_skips_payouts(self):
        assert daily_bars([payout(100, 1)]) == []

    def test_recent_activity_newest_first(self):
        entries = [trade(1, 1), payout(100, 4), trade(2, 3), trade(3, 2)]

        recent = recent_activity(entries, limit=3)

        assert [e.date.day for e in recent] == [4, 3, 2]

    def test_non_positive_limits(self):
        entries = [trade(1, 1)]

        assert daily_bars(entries, limit=0) == []
        assert recent_activity(entries, limit=0) == []


class TestGradientOffset:

    def test_all_profit(self):
        assert gradient_offset([{"value": 1}, {"value": 5}]) == 1.0

    def test_all_drawdown(self):
        assert gradient_offset([{"value": -1}, {"value": -5}]) == 0.0

    def test_mixed(self):
        assert gradient_offset([{"value": 30}, {"value": -10}]) == 0.75

    def test_empty(self):
        assert gradient_offset([]) == 1.0


class TestGoalCards:

    def test_remaining_never_negative(self):
        stats = compute_stats([payout(25000, 1)])

        assert remaining_to_goal(stats, 20000) == 0
        assert is_goal_reached(stats, 20000)

    def test_remaining_before_goal(self):
        stats = compute_stats([payout(5000, 1)])

        assert remaining_to_goal(stats, 20000) == 15000
        assert not is_goal_reached(stats, 20000)


class TestSummerCountdown:

    def test_day_before(self):
        assert days_until_summer(date(2025, 6, 20)) == 1

    def test_on_the_day(self):
        assert days_until_summer(date(2025, 6, 21)) == 0

    def test_after_rolls_to_next_year(self):
        assert days_until_summer(date(2025, 6, 22)) == 364

    def test_new_year(self):
        assert days_until_summer(date(2025, 1, 1)) == 171
