"""
Main analytics engine coordinator.

Entry point for the journal application: turns raw operation rows into
records, runs the requested analysis and returns the payload the UI renders.
Analyses without enough history return None instead of raising.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import OperationRecord
from .data.parsers import RawOperation, parse_operations
from .errors import (
    ConfigurationError,
    DataQualityError,
    InsufficientDataError,
)
from .logging.config import get_simulation_logger
from .metrics.aggregator import aggregate_daily, daily_results
from .metrics.calculator import MetricsCalculator
from .metrics.capital import simulate_capital
from .metrics.monte_carlo import MonteCarloSimulator, RandomSource
from .metrics.patterns import analyze_patterns
from .metrics.risk import compute_risk_metrics
from .metrics.streaks import analyze_streaks
from .metrics.summary import summarize_performance
from .signals.classifier import CrossValidationClassifier
from .utils.time import Clock, get_reference_date

logger = structlog.get_logger(__name__)
simulation_logger = get_simulation_logger(__name__)


class AnalyticsEngine:
    """
    Coordinator for the trading performance analytics.

    Pipeline:
    Raw rows → Records → Daily aggregates → Simulations / Statistics → Payloads
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        config: Optional[DefaultConfig] = None
    ) -> None:
        """
        Initialize the analytics engine.

        Args:
            config_dir: Directory holding profiles.yaml
            profile: Profile whose overrides apply on top of the defaults
            overrides: Per-engine overrides, highest precedence
            random_source: Uniform source for the resampler; seeded from
                config when omitted
            clock: Supplies "today" when a call has no reference date
            config: Fully built configuration, bypasses loading
        """
        self.logger = logger
        self.config = config or self._load_config(config_dir, profile, overrides)
        self.clock = clock

        self.calculator = MetricsCalculator(self.config, random_source)
        self.monte_carlo = self.calculator.monte_carlo
        self.classifier = CrossValidationClassifier()

        self.logger.info("Analytics engine initialized", profile=profile)

    @staticmethod
    def _load_config(
        config_dir: Optional[str],
        profile: Optional[str],
        overrides: Optional[dict[str, Any]]
    ) -> DefaultConfig:
        loader = ConfigLoader.create(config_dir)
        merged = loader.merge_config(profile, overrides)

        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            raise ConfigurationError(
                "Configuration validation failed",
                source=profile or "defaults",
                errors=error_msgs,
            )

        return loader.build_config(merged)

    def load_records(self, operations: Iterable[RawOperation], skip_invalid: bool = False) -> list[OperationRecord]:
        """
        Parse raw operation rows.

        Raises:
            MissingDataError, MalformedDataError: On a bad row unless skip_invalid
        """
        try:
            return parse_operations(operations, skip_invalid=skip_invalid)
        except DataQualityError as e:
            self.logger.warning(
                "Rejected operations input",
                error=str(e),
                error_type=type(e).__name__,
                context=getattr(e, 'context', {})
            )
            raise

    def simulate_capital(
        self,
        operations: Iterable[RawOperation],
        initial_capital: Optional[float] = None,
        require: bool = False
    ) -> Optional[dict[str, Any]]:
        """
        Replay daily results against a starting capital.

        Args:
            operations: Raw rows or records
            initial_capital: Starting balance; configured default when omitted
            require: Raise InsufficientDataError instead of returning None

        Returns:
            Capital payload, or None when not computable
        """
        records = self.load_records(operations)
        capital = initial_capital if initial_capital is not None else self.config.capital.default_initial_capital

        simulation = None
        if capital is not None:
            simulation = simulate_capital(
                aggregate_daily(records), capital, self.config.presentation.max_chart_points
            )

        if simulation is None:
            return self._not_computable(
                "capital", require, required_count=1, available_count=len(records),
                reason="no operations or non-positive capital"
            )

        simulation_logger.info(
            "Capital simulation completed",
            days=simulation.total_days,
            final_balance=simulation.final_balance,
            ruin_day_index=simulation.ruin_day_index,
        )
        return simulation.to_dict()

    def run_monte_carlo(
        self,
        operations: Iterable[RawOperation],
        simulations: Optional[int] = None,
        require: bool = False
    ) -> Optional[dict[str, Any]]:
        """
        Resample daily results into a percentile envelope.

        Args:
            operations: Raw rows or records
            simulations: Number of runs; configured count when omitted
            require: Raise InsufficientDataError instead of returning None

        Returns:
            Monte Carlo payload, or None with fewer than two trading days
        """
        results = daily_results(self.load_records(operations))
        outcome = self.monte_carlo.run(results, simulations)
        return self._monte_carlo_payload(outcome, len(results), require)

    async def run_monte_carlo_async(
        self,
        operations: Iterable[RawOperation],
        simulations: Optional[int] = None,
        require: bool = False
    ) -> Optional[dict[str, Any]]:
        """Async variant of run_monte_carlo that yields before the heavy loop."""
        results = daily_results(self.load_records(operations))
        outcome = await self.monte_carlo.run_async(results, simulations)
        return self._monte_carlo_payload(outcome, len(results), require)

    def analyze_streaks(self, operations: Iterable[RawOperation]) -> dict[str, Any]:
        """Streak lengths and both recovery statistics."""
        daily = aggregate_daily(self.load_records(operations))
        return analyze_streaks(daily, self.config.streaks.min_streak_length).to_dict()

    def classify_slots(
        self,
        operations: Iterable[RawOperation],
        reference_date: Optional[Union[date, datetime]] = None
    ) -> dict[str, Any]:
        """
        Compare the reference month against history per weekday × hour slot.

        Args:
            operations: Raw rows or records
            reference_date: Any day in the current month; the clock is used when omitted

        Returns:
            Slot grid payload
        """
        records = self.load_records(operations)
        reference = get_reference_date(reference_date, self.clock)
        result = self.classifier.classify(records, reference)

        self.logger.info(
            "Slot grid classified",
            reference_month=result.reference_month,
            score=result.summary.score,
            slots_with_data=result.summary.slots_with_data
        )
        return result.to_dict()

    def risk_metrics(self, operations: Iterable[RawOperation]) -> dict[str, Any]:
        """Sharpe, drawdown, profit factor and related figures."""
        return compute_risk_metrics(self.load_records(operations)).to_dict()

    def performance_summary(self, operations: Iterable[RawOperation]) -> dict[str, Any]:
        """Dashboard headline statistics."""
        return summarize_performance(self.load_records(operations)).to_dict()

    def analyze_patterns(self, operations: Iterable[RawOperation]) -> Optional[dict[str, Any]]:
        """Best and worst hours, weekdays and strategies, or None without records."""
        report = analyze_patterns(self.load_records(operations), self.config.patterns)
        return report.to_dict() if report else None

    def build_report(
        self,
        operations: Iterable[RawOperation],
        initial_capital: Optional[float] = None,
        reference_date: Optional[Union[date, datetime]] = None,
        run_monte_carlo: bool = True
    ) -> dict[str, Any]:
        """
        Run every analysis over one set of operations.

        Returns:
            Snapshot payload plus the slot grid under ``crossValidation``
        """
        records = self.load_records(operations)
        snapshot = self.calculator.calculate(records, initial_capital, run_monte_carlo)
        reference = get_reference_date(reference_date, self.clock)

        report = snapshot.to_dict()
        report["crossValidation"] = self.classifier.classify(records, reference).to_dict()

        self.logger.info(
            "Analytics report built",
            operations=len(records),
            days=snapshot.days,
            not_computable=list(snapshot.not_computable)
        )
        return report

    def _monte_carlo_payload(self, outcome, days: int, require: bool) -> Optional[dict[str, Any]]:
        if outcome is None:
            return self._not_computable(
                "monte_carlo", require, required_count=self.config.monte_carlo.min_days,
                available_count=days, reason="not enough trading days"
            )

        simulation_logger.info(
            "Monte Carlo simulation completed",
            days=outcome.days,
            simulations=outcome.simulations,
            profit_probability=outcome.profit_probability,
        )
        return outcome.to_dict()

    def _not_computable(
        self,
        analysis: str,
        require: bool,
        required_count: int,
        available_count: int,
        reason: str
    ) -> None:
        self.logger.info(
            "Analysis not computable",
            analysis=analysis,
            reason=reason,
            available_count=available_count
        )
        if require:
            raise InsufficientDataError(
                f"{analysis} is not computable: {reason}",
                required_count=required_count,
                available_count=available_count,
                context={"analysis": analysis},
            )
        return None
