"""Analytics over trade records: aggregation, streaks, simulations and risk"""

from .aggregator import aggregate_daily, aggregate_monthly, aggregate_slots, daily_results
from .calculator import MetricsCalculator
from .capital import calculate_drawdown_pct, simulate_capital
from .monte_carlo import MonteCarloSimulator, RandomSource, fisher_yates_shuffle
from .patterns import analyze_patterns
from .risk import compute_risk_metrics
from .streaks import analyze_streaks
from .summary import summarize_performance

__all__ = [
    "MetricsCalculator",
    "MonteCarloSimulator",
    "RandomSource",
    "aggregate_daily",
    "aggregate_monthly",
    "aggregate_slots",
    "analyze_patterns",
    "analyze_streaks",
    "calculate_drawdown_pct",
    "compute_risk_metrics",
    "daily_results",
    "fisher_yates_shuffle",
    "simulate_capital",
    "summarize_performance",
]
