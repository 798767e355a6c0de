"""Result models for the capital and Monte Carlo simulations."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CapitalPoint:
    """Account balance after ``day_index`` trading days (0 = start)."""
    day_index: int
    balance: float

    def to_dict(self) -> dict[str, Any]:
        return {"dayIndex": self.day_index, "balance": self.balance}


@dataclass(frozen=True)
class CapitalSimulation:
    """Historical replay of daily results against a starting capital."""
    initial_capital: float
    trajectory: list[CapitalPoint]           # Downsampled for presentation
    final_balance: float
    ruin_day_index: Optional[int]            # First 1-based day with balance <= 0
    yield_percent: float
    max_drawdown_percent: float
    total_days: int

    @property
    def survived(self) -> bool:
        return self.ruin_day_index is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "trajectory": [point.to_dict() for point in self.trajectory],
            "finalBalance": self.final_balance,
            "ruinDayIndex": self.ruin_day_index,
            "yieldPercent": self.yield_percent,
            "maxDrawdownPercent": self.max_drawdown_percent,
            "totalDays": self.total_days,
        }


@dataclass(frozen=True)
class EnvelopePoint:
    """Percentile band across all simulated paths at one elapsed day."""
    day_index: int
    best: float
    median: float
    worst: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayIndex": self.day_index,
            "best": self.best,
            "median": self.median,
            "worst": self.worst,
        }


@dataclass(frozen=True)
class MonteCarloResult:
    """Distribution of cumulative outcomes over reshuffled daily results."""
    envelope: list[EnvelopePoint]            # Downsampled for presentation
    profit_probability: float                # 0..100
    median_result: float
    var95: float                             # 5th percentile of final results
    best_scenario95: float                   # 95th percentile of final results
    simulations: int
    days: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "envelope": [point.to_dict() for point in self.envelope],
            "profitProbability": self.profit_probability,
            "medianResult": self.median_result,
            "var95": self.var95,
            "bestScenario95": self.best_scenario95,
            "simulations": self.simulations,
        }
