"""Main metrics calculator for coordinating all analytics over one record set"""

from typing import Optional, Sequence

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import OperationRecord
from ..errors import (
    InsufficientDataError,
    MalformedDataError,
    MetricsCalculationError,
    MissingDataError,
)
from ..logging.config import get_simulation_logger, log_simulation_summary
from ..models.metrics import AnalyticsSnapshot
from .aggregator import aggregate_daily
from .capital import simulate_capital
from .monte_carlo import MonteCarloSimulator, RandomSource
from .patterns import analyze_patterns
from .risk import compute_risk_metrics
from .streaks import analyze_streaks
from .summary import summarize_performance

logger = structlog.get_logger(__name__)
simulation_logger = get_simulation_logger(__name__)


class MetricsCalculator:
    """
    Main metrics calculator that coordinates every per-record-set analysis
    """

    def __init__(self, config: Optional[DefaultConfig] = None,
                 random_source: Optional[RandomSource] = None):
        self.config = config or get_default_config()
        self.random_source = random_source

        self.monte_carlo = MonteCarloSimulator(
            params=self.config.monte_carlo,
            random_source=random_source,
            max_points=self.config.presentation.max_chart_points
        )

    def calculate(self, records: Sequence[OperationRecord],
                  initial_capital: Optional[float] = None,
                  run_monte_carlo: bool = True) -> AnalyticsSnapshot:
        """
        Calculate all analytics for a set of records

        Args:
            records: Validated trade records in any order
            initial_capital: Starting balance for the capital replay; the
                configured default is used when omitted
            run_monte_carlo: Skip the resampler when False

        Returns:
            AnalyticsSnapshot; analyses without enough data are None and
            listed in ``not_computable``
        """
        try:
            daily = aggregate_daily(records)
            not_computable = []

            streaks = self._run("streaks", analyze_streaks, daily, self.config.streaks.min_streak_length)
            risk = self._run("risk", compute_risk_metrics, records)
            summary = self._run("summary", summarize_performance, records)
            patterns = self._run(
                "patterns", analyze_patterns, records, self.config.patterns
            )
            if patterns is None:
                not_computable.append("patterns")

            capital = None
            if initial_capital is None:
                initial_capital = self.config.capital.default_initial_capital
            if initial_capital is not None:
                capital = self._run(
                    "capital", simulate_capital, daily, initial_capital,
                    self.config.presentation.max_chart_points
                )
            if capital is None:
                not_computable.append("capital")
            else:
                log_simulation_summary(simulation_logger, "capital", capital.total_days, {
                    "final_balance": capital.final_balance,
                    "ruin_day_index": capital.ruin_day_index,
                    "max_drawdown_percent": capital.max_drawdown_percent,
                })

            monte_carlo = None
            if run_monte_carlo:
                results = [day.net_result for day in daily]
                monte_carlo = self._run("monte_carlo", self.monte_carlo.run, results)
                if monte_carlo is not None:
                    log_simulation_summary(simulation_logger, "monte_carlo", monte_carlo.days, {
                        "simulations": monte_carlo.simulations,
                        "profit_probability": monte_carlo.profit_probability,
                        "var95": monte_carlo.var95,
                    })
            if monte_carlo is None:
                not_computable.append("monte_carlo")

            logger.debug(
                "Analytics calculated",
                operations=len(records),
                days=len(daily),
                not_computable=not_computable
            )

            return AnalyticsSnapshot(
                days=len(daily),
                streaks=streaks,
                risk=risk,
                summary=summary,
                patterns=patterns,
                capital=capital,
                monte_carlo=monte_carlo,
                not_computable=tuple(not_computable),
            )

        except (MissingDataError, InsufficientDataError, MalformedDataError, MetricsCalculationError):
            raise
        except Exception as e:
            raise MetricsCalculationError(
                f"Unexpected error in analytics calculation: {str(e)}",
                metric_name="unknown",
                calculation_input={"operations": len(records)}
            ) from e

    @staticmethod
    def _run(metric_name: str, func, *args):
        """Call one analysis, wrapping unexpected failures with the metric name."""
        try:
            return func(*args)
        except (MissingDataError, InsufficientDataError, MalformedDataError, MetricsCalculationError):
            raise
        except Exception as e:
            raise MetricsCalculationError(
                f"{metric_name} calculation failed: {str(e)}",
                metric_name=metric_name,
            ) from e
