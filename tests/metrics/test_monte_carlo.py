"""Tests for Monte Carlo resampling"""

import asyncio
import random

import pytest

from journal_engine.config.defaults import MonteCarloParams
from journal_engine.metrics.monte_carlo import (
    MonteCarloSimulator,
    cumulative_path,
    fisher_yates_shuffle,
    percentile_index,
)


class TestShuffle:
    """Test the Fisher-Yates permutation"""

    def test_zero_draws_rotate(self, sequence_source):
        """Test that always drawing 0 swaps every position with the first"""
        assert fisher_yates_shuffle([1, 2, 3], sequence_source([0.0])) == [2, 3, 1]

    def test_high_draws_keep_order(self, sequence_source):
        """Test that draws near 1 leave the sequence unchanged"""
        assert fisher_yates_shuffle([1, 2, 3], sequence_source([0.99])) == [1, 2, 3]

    def test_input_untouched(self, sequence_source):
        """Test that the caller's list is not mutated"""
        values = [4.0, -1.0, 2.5]
        fisher_yates_shuffle(values, sequence_source([0.0]))

        assert values == [4.0, -1.0, 2.5]

    def test_is_permutation(self):
        """Test the multiset of values is preserved"""
        values = [5.0, -3.0, 2.0, 2.0, -8.0, 11.0]
        shuffled = fisher_yates_shuffle(values, random.Random(7))

        assert sorted(shuffled) == sorted(values)

    def test_draw_count(self, sequence_source):
        """Test one draw per position after the first"""
        source = sequence_source([0.5])
        fisher_yates_shuffle([1, 2, 3, 4, 5], source)

        assert source.calls == 4


class TestHelpers:
    """Test path and percentile helpers"""

    def test_cumulative_path(self):
        """Test running sum starting from zero"""
        assert cumulative_path([10, -5, 20]) == [0.0, 10.0, 5.0, 25.0]
        assert cumulative_path([]) == [0.0]

    def test_percentile_index(self):
        """Test floor indexing clamped to the last element"""
        assert percentile_index(500, 0.05) == 25
        assert percentile_index(500, 0.5) == 250
        assert percentile_index(500, 0.95) == 475
        assert percentile_index(10, 1.0) == 9
        assert percentile_index(1, 0.95) == 0


class TestMonteCarloSimulator:
    """Test the resampler"""

    def test_too_little_history(self):
        """Test fewer than two days is not computable"""
        simulator = MonteCarloSimulator(random_source=random.Random(1))

        assert simulator.run([]) is None
        assert simulator.run([42.0]) is None
        assert not simulator.can_simulate([42.0])

    def test_non_positive_simulations_rejected(self):
        """Test zero runs is an argument error"""
        simulator = MonteCarloSimulator(random_source=random.Random(1))

        with pytest.raises(ValueError):
            simulator.run([1.0, 2.0], simulations=0)

    def test_final_sum_is_order_independent(self):
        """Test every run ends on the same total"""
        simulator = MonteCarloSimulator(random_source=random.Random(3))
        result = simulator.run([10.0, -5.0, 20.0], simulations=200)

        assert result.var95 == 25
        assert result.median_result == 25
        assert result.best_scenario95 == 25
        assert result.profit_probability == 100.0
        assert result.simulations == 200
        assert result.days == 3

    def test_envelope_endpoints(self):
        """Test the envelope starts at zero and ends on the total"""
        simulator = MonteCarloSimulator(random_source=random.Random(3))
        result = simulator.run([10.0, -5.0, 20.0], simulations=50)

        first, last = result.envelope[0], result.envelope[-1]
        assert (first.worst, first.median, first.best) == (0, 0, 0)
        assert (last.worst, last.median, last.best) == (25, 25, 25)
        assert [p.day_index for p in result.envelope] == [0, 1, 2, 3]

    def test_all_positive_days(self):
        """Test every run is profitable when every day is"""
        simulator = MonteCarloSimulator(random_source=random.Random(11))
        result = simulator.run([100.0, 50.0, 200.0, 30.0, 80.0], simulations=100)

        assert result.profit_probability == 100.0
        assert result.median_result == pytest.approx(460.0)

    def test_small_positive_history(self):
        """Test three winning days give certain profit and a fixed final"""
        result = MonteCarloSimulator(random_source=random.Random(3)).run([10, 20, 30], simulations=100)

        assert result.profit_probability == 100.0
        assert result.var95 == result.best_scenario95 == 60

    def test_all_negative_days(self):
        """Test no run is profitable when every day loses"""
        simulator = MonteCarloSimulator(random_source=random.Random(11))
        result = simulator.run([-10.0, -20.0], simulations=20)

        assert result.profit_probability == 0.0

    def test_envelope_ordering(self):
        """Test worst <= median <= best at every index"""
        simulator = MonteCarloSimulator(random_source=random.Random(5))
        result = simulator.run([120.0, -80.0, 35.5, -210.0, 90.0, 15.25, -40.0, 60.0], simulations=300)

        for point in result.envelope:
            assert point.worst <= point.median <= point.best
        assert result.var95 <= result.median_result <= result.best_scenario95
        assert 0 <= result.profit_probability <= 100

    def test_envelope_rounded_half_up(self, sequence_source):
        """Test envelope values round half away from below"""
        simulator = MonteCarloSimulator(random_source=sequence_source([0.99]))
        result = simulator.run([0.5, -1.0, 0.25], simulations=1)

        # Path 0, 0.5, -0.5, -0.25
        assert [p.median for p in result.envelope] == [0, 1, 0, 0]
        # Scalar figures are not rounded
        assert result.median_result == pytest.approx(-0.25)

    def test_envelope_rounding_disabled(self, sequence_source):
        """Test raw envelope values when rounding is off"""
        params = MonteCarloParams(round_envelope=False)
        simulator = MonteCarloSimulator(params, random_source=sequence_source([0.99]))
        result = simulator.run([0.5, -1.0, 0.25], simulations=1)

        assert [p.median for p in result.envelope] == [0.0, 0.5, -0.5, -0.25]

    def test_configured_simulation_count(self):
        """Test the configured count applies when none is passed"""
        simulator = MonteCarloSimulator(MonteCarloParams(simulations=40), random_source=random.Random(2))

        assert simulator.run([1.0, -2.0, 3.0]).simulations == 40

    def test_seeded_runs_reproducible(self):
        """Test the same seed gives the same result"""
        results = [12.0, -7.0, 3.5, -1.0, 9.0, -15.0]
        first = MonteCarloSimulator(MonteCarloParams(seed=99)).run(results, simulations=100)
        second = MonteCarloSimulator(MonteCarloParams(seed=99)).run(results, simulations=100)

        assert first == second

    def test_envelope_downsampled(self):
        """Test long envelopes are thinned to the presentation limit"""
        simulator = MonteCarloSimulator(random_source=random.Random(4), max_points=365)
        result = simulator.run([1.0] * 400, simulations=5)

        assert len(result.envelope) == 201
        assert result.envelope[0].day_index == 0
        assert result.envelope[-1].day_index == 400
        assert result.days == 400

    def test_run_async(self):
        """Test the async variant returns the same kind of result"""
        simulator = MonteCarloSimulator(random_source=random.Random(8))

        result = asyncio.run(simulator.run_async([5.0, 6.0], simulations=10))

        assert result.simulations == 10
        assert result.profit_probability == 100.0

    def test_to_dict(self):
        """Test the UI payload"""
        simulator = MonteCarloSimulator(random_source=random.Random(8))
        payload = simulator.run([5.0, -6.0], simulations=10).to_dict()

        assert set(payload) == {
            "envelope", "profitProbability", "medianResult", "var95", "bestScenario95", "simulations",
        }
        assert set(payload["envelope"][0]) == {"dayIndex", "best", "median", "worst"}
