"""Tests for the capital trajectory simulator"""

import pytest

from journal_engine.metrics.capital import calculate_drawdown_pct, simulate_capital


class TestDrawdown:
    """Test drawdown percentage"""

    def test_drawdown_from_peak(self):
        """Test drawdown relative to the running peak"""
        assert calculate_drawdown_pct(1100, 1050) == pytest.approx(50 / 1100 * 100)

    def test_at_peak(self):
        """Test no drawdown at the peak"""
        assert calculate_drawdown_pct(1000, 1000) == 0.0

    def test_non_positive_peak(self):
        """Test drawdown is zero when the peak is not positive"""
        assert calculate_drawdown_pct(0, -5) == 0.0
        assert calculate_drawdown_pct(-10, -20) == 0.0


class TestSimulateCapital:
    """Test capital replay"""

    def test_reference_scenario(self, make_daily):
        """Test 100, -50, 200, -30, 80 on 1000"""
        result = simulate_capital(make_daily([100, -50, 200, -30, 80]), 1000)

        assert result.final_balance == 1300
        assert result.yield_percent == pytest.approx(30.0)
        assert result.ruin_day_index is None
        assert result.survived
        assert result.max_drawdown_percent == pytest.approx(50 / 1100 * 100)
        assert result.max_drawdown_percent == pytest.approx(4.545, abs=1e-3)
        assert result.total_days == 5

    def test_capital_identity(self, make_daily):
        """Test balance[n] = initial + sum of the first n results"""
        results = [12.5, -40.0, 7.25, 3.0, -1.5]
        simulation = simulate_capital(make_daily(results), 500)

        assert simulation.trajectory[0].day_index == 0
        assert simulation.trajectory[0].balance == 500
        for n, point in enumerate(simulation.trajectory):
            assert point.day_index == n
            assert point.balance == pytest.approx(500 + sum(results[:n]))

    def test_ruin_detected_and_replay_continues(self, make_daily):
        """Test the first day at or below zero is reported and replay goes on"""
        result = simulate_capital(make_daily([-600, -500, 200]), 1000)

        assert result.ruin_day_index == 2
        assert not result.survived
        assert result.final_balance == 100
        assert result.yield_percent == pytest.approx(-90.0)
        assert result.max_drawdown_percent == pytest.approx(110.0)
        assert len(result.trajectory) == 4

    def test_ruin_at_exactly_zero(self, make_daily):
        """Test a balance of exactly zero counts as ruin"""
        result = simulate_capital(make_daily([50, -1050, 10]), 1000)

        assert result.ruin_day_index == 2

    def test_no_drawdown_when_never_below_peak(self, make_daily):
        """Test monotonically rising balance has zero drawdown"""
        result = simulate_capital(make_daily([10, 20, 30]), 100)

        assert result.max_drawdown_percent == 0.0

    def test_drawdown_positive_when_below_peak(self, make_daily):
        """Test any dip below the peak yields a positive drawdown"""
        result = simulate_capital(make_daily([10, -1, 30]), 100)

        assert result.max_drawdown_percent > 0

    def test_not_computable(self, make_daily):
        """Test non-positive capital or no days return None"""
        assert simulate_capital(make_daily([10, 20]), 0) is None
        assert simulate_capital(make_daily([10, 20]), -100) is None
        assert simulate_capital([], 1000) is None

    def test_downsampling_keeps_metrics(self, make_daily):
        """Test long trajectories are thinned after metrics are computed"""
        results = [1.0] * 250 + [-2.0] + [1.0] * 249
        result = simulate_capital(make_daily(results), 1000, max_points=365)

        # 501 points, stride 2
        assert len(result.trajectory) == 251
        assert result.trajectory[0].day_index == 0
        assert result.trajectory[0].balance == 1000
        assert result.trajectory[-1].day_index == 500
        assert result.final_balance == pytest.approx(1000 + sum(results))
        assert result.total_days == 500
        # The one losing day is index 251 and is not in the thinned series
        assert result.max_drawdown_percent == pytest.approx(2 / 1250 * 100)

    def test_to_dict(self, make_daily):
        """Test the UI payload"""
        payload = simulate_capital(make_daily([100, -50]), 1000).to_dict()

        assert payload["trajectory"][0] == {"dayIndex": 0, "balance": 1000}
        assert payload["finalBalance"] == 1050
        assert payload["ruinDayIndex"] is None
        assert payload["yieldPercent"] == pytest.approx(5.0)
        assert payload["totalDays"] == 2
