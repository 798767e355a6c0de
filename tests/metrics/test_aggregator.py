"""Tests for daily, slot and monthly aggregation"""

import pytest
from datetime import date

from journal_engine.metrics.aggregator import (
    SESSION_HOURS,
    SESSION_WEEKDAYS,
    aggregate_daily,
    aggregate_monthly,
    aggregate_slots,
    daily_results,
    in_session,
)


class TestAggregateDaily:
    """Test per-day aggregation"""

    def test_empty_input(self):
        """Test that no records give no days"""
        assert aggregate_daily([]) == []
        assert daily_results([]) == []

    def test_groups_and_sorts_by_date(self, make_record):
        """Test grouping into days sorted ascending regardless of input order"""
        records = [
            make_record("2024-01-03", 40),
            make_record("2024-01-01", 100),
            make_record("2024-01-03", -10),
            make_record("2024-01-02", -25),
        ]

        daily = aggregate_daily(records)

        assert [d.date for d in daily] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
        assert [d.net_result for d in daily] == [100, -25, 30]
        assert daily_results(records) == [100, -25, 30]

    def test_day_statistics(self, make_record):
        """Test counts and extremes within a day"""
        records = [
            make_record("2024-01-01", 50),
            make_record("2024-01-01", -20),
            make_record("2024-01-01", 0),
            make_record("2024-01-01", 35),
        ]

        day = aggregate_daily(records)[0]

        assert day.ops_count == 4
        assert day.wins == 2
        assert day.losses == 1
        assert day.best_trade == 50
        assert day.worst_trade == -20
        assert day.net_result == 65
        assert day.is_positive
        assert not day.is_negative

    def test_sum_is_conserved(self, make_record):
        """Test that daily totals add up to the sum of all results"""
        results = [12.5, -3.25, 7.0, -40.0, 18.75, 0.5]
        days = ["2024-01-01", "2024-01-01", "2024-01-02", "2024-01-05", "2024-01-05", "2024-01-09"]
        records = [make_record(day, value) for day, value in zip(days, results)]

        assert sum(daily_results(records)) == pytest.approx(sum(results))

    def test_idempotent(self, make_record):
        """Test that aggregating the same input twice gives equal output"""
        records = [make_record("2024-01-02", 10), make_record("2024-01-01", -5), make_record("2024-01-02", 7)]

        assert aggregate_daily(records) == aggregate_daily(records)

    def test_input_order_irrelevant(self, make_record):
        """Test that shuffled input gives the same aggregates"""
        records = [make_record("2024-01-02", 10), make_record("2024-01-01", -5), make_record("2024-01-03", 7)]

        assert aggregate_daily(records) == aggregate_daily(list(reversed(records)))


class TestAggregateSlots:
    """Test weekday × hour aggregation"""

    def test_slot_sums_and_counts(self, make_record):
        """Test summing within a slot"""
        # 2024-01-01 is a Monday
        records = [
            make_record("2024-01-01", 30, hour=10),
            make_record("2024-01-08", -10, hour=10, minute=45),
            make_record("2024-01-02", 5, hour=9),
        ]

        slots = aggregate_slots(records)

        assert slots[(1, 10)].net_result == 20
        assert slots[(1, 10)].ops_count == 2
        assert slots[(2, 9)].ops_count == 1
        assert len(slots) == 2

    def test_weekends_dropped(self, make_record):
        """Test that Saturday and Sunday records are excluded"""
        records = [make_record("2024-01-06", 100), make_record("2024-01-07", 100)]

        assert aggregate_slots(records) == {}

    def test_hours_outside_session_dropped(self, make_record):
        """Test the inclusive 9h-17h window"""
        records = [
            make_record("2024-01-01", 1, hour=8, minute=59),
            make_record("2024-01-01", 2, hour=9),
            make_record("2024-01-01", 3, hour=17, minute=59),
            make_record("2024-01-01", 4, hour=18),
        ]

        slots = aggregate_slots(records)

        assert set(slots) == {(1, 9), (1, 17)}

    def test_fixed_grid(self, make_record):
        """Test the window is Mon-Fri by 9h-17h"""
        assert list(SESSION_WEEKDAYS) == [1, 2, 3, 4, 5]
        assert list(SESSION_HOURS) == list(range(9, 18))
        assert in_session(make_record("2024-01-05", 1, hour=17))     # Friday
        assert not in_session(make_record("2024-01-06", 1, hour=10))  # Saturday


class TestAggregateMonthly:
    """Test per-month aggregation"""

    def test_monthly_totals(self, make_record):
        """Test month keys and sums"""
        records = [
            make_record("2024-02-10", -5),
            make_record("2024-01-15", 10),
            make_record("2024-01-20", 15),
        ]

        monthly = aggregate_monthly(records)

        assert list(monthly) == ["2024-01", "2024-02"]
        assert monthly["2024-01"] == 25
        assert monthly["2024-02"] == -5
