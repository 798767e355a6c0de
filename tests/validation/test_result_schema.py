"""Tests for result payload validation"""

import copy
import random
from datetime import date

import pytest

from journal_engine.engine import AnalyticsEngine
from journal_engine.validation.result_schema import (
    ResultValidationError,
    ResultValidator,
    validate_capital,
    validate_cross_validation,
    validate_monte_carlo,
)


@pytest.fixture
def engine():
    return AnalyticsEngine(random_source=random.Random(3))


@pytest.fixture
def capital_payload(engine, scenario_a_operations):
    return engine.simulate_capital(scenario_a_operations, 1000)


@pytest.fixture
def monte_carlo_payload(engine, scenario_a_operations):
    return engine.run_monte_carlo(scenario_a_operations, simulations=50)


@pytest.fixture
def grid_payload(engine, journal_operations):
    return engine.classify_slots(journal_operations, reference_date=date(2024, 3, 15))


class TestCapitalPayload:
    """Test capital payload checks"""

    def test_engine_output_valid(self, capital_payload):
        """Test real output passes"""
        assert validate_capital(capital_payload, initial_capital=1000)

    def test_first_balance_must_match(self, capital_payload):
        """Test the first point must be the initial capital"""
        with pytest.raises(ResultValidationError):
            validate_capital(capital_payload, initial_capital=999)

    def test_missing_field(self, capital_payload):
        """Test required fields"""
        del capital_payload["finalBalance"]

        with pytest.raises(ResultValidationError, match="finalBalance"):
            validate_capital(capital_payload)

    def test_negative_drawdown(self, capital_payload):
        """Test drawdown cannot be negative"""
        capital_payload["maxDrawdownPercent"] = -1.0

        with pytest.raises(ResultValidationError):
            validate_capital(capital_payload)

    def test_zero_ruin_day(self, capital_payload):
        """Test ruin day indices are 1-based"""
        capital_payload["ruinDayIndex"] = 0

        with pytest.raises(ResultValidationError):
            validate_capital(capital_payload)

    def test_not_a_mapping(self):
        """Test non-object payloads"""
        with pytest.raises(ResultValidationError):
            validate_capital(None)


class TestMonteCarloPayload:
    """Test Monte Carlo payload checks"""

    def test_engine_output_valid(self, monte_carlo_payload):
        """Test real output passes"""
        assert validate_monte_carlo(monte_carlo_payload)

    def test_envelope_out_of_order(self, monte_carlo_payload):
        """Test worst above best is rejected"""
        point = monte_carlo_payload["envelope"][1]
        point["worst"], point["best"] = point["best"] + 1, point["worst"]

        with pytest.raises(ResultValidationError, match="out of order"):
            validate_monte_carlo(monte_carlo_payload)

    def test_probability_bounds(self, monte_carlo_payload):
        """Test probability must be a percentage"""
        monte_carlo_payload["profitProbability"] = 120

        with pytest.raises(ResultValidationError):
            validate_monte_carlo(monte_carlo_payload)

    def test_scalar_ordering(self, monte_carlo_payload):
        """Test var95 <= median <= best"""
        monte_carlo_payload["var95"] = monte_carlo_payload["bestScenario95"] + 1

        with pytest.raises(ResultValidationError):
            validate_monte_carlo(monte_carlo_payload)


class TestCrossValidationPayload:
    """Test slot grid payload checks"""

    def test_engine_output_valid(self, grid_payload):
        """Test real output passes"""
        assert validate_cross_validation(grid_payload)

    def test_no_data_must_be_sem_dados(self, grid_payload):
        """Test a slot without data cannot carry a trading signal"""
        broken = copy.deepcopy(grid_payload)
        broken["cells"][-1]["signal"] = "LIGAR"
        broken["summary"]["ligar"] += 1
        broken["summary"]["semDados"] -= 1

        with pytest.raises(ResultValidationError, match="no data"):
            validate_cross_validation(broken)

    def test_summary_must_match_cells(self, grid_payload):
        """Test summary counts are recomputed from cells"""
        grid_payload["summary"]["alerta"] += 1

        with pytest.raises(ResultValidationError, match="alerta"):
            validate_cross_validation(grid_payload)

    def test_score_bounds(self, grid_payload):
        """Test score must be a percentage"""
        grid_payload["summary"]["score"] = 101

        with pytest.raises(ResultValidationError):
            validate_cross_validation(grid_payload)


class TestResultValidator:
    """Test validator utilities"""

    def test_get_schema(self):
        """Test schemas are returned as copies"""
        validator = ResultValidator()
        schema = validator.get_schema("capital")
        schema["required"] = []

        assert validator.get_schema("capital")["required"]
