"""Default configuration parameters for the analytics engine."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MonteCarloParams:
    """Monte Carlo resampling parameters."""
    simulations: int = 500                           # Independent permutations per run
    min_days: int = 2                                # Below this the resampler is a no-op
    worst_percentile: float = 0.05                   # VaR95 / envelope lower band
    median_percentile: float = 0.5
    best_percentile: float = 0.95                    # Optimistic scenario / upper band
    round_envelope: bool = True                      # Whole currency units on the chart
    seed: Optional[int] = None                       # None = nondeterministic source


@dataclass(frozen=True)
class CapitalParams:
    """Capital trajectory parameters."""
    default_initial_capital: Optional[float] = None  # Used when a call omits capital


@dataclass(frozen=True)
class StreakParams:
    """Streak analysis parameters."""
    min_streak_length: int = 2                       # Shortest run whose follow-up is recorded


@dataclass(frozen=True)
class PatternParams:
    """Minimum sample sizes for pattern ranking."""
    min_hour_ops: int = 5
    min_weekday_ops: int = 3
    min_strategy_ops: int = 5
    morning_cutoff_hour: int = 12                    # Hours below this count as morning


@dataclass(frozen=True)
class PresentationParams:
    """Chart presentation parameters."""
    max_chart_points: int = 365                      # Stride-downsample above this


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    monte_carlo: MonteCarloParams
    capital: CapitalParams
    streaks: StreakParams
    patterns: PatternParams
    presentation: PresentationParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        monte_carlo=MonteCarloParams(),
        capital=CapitalParams(),
        streaks=StreakParams(),
        patterns=PatternParams(),
        presentation=PresentationParams(),
    )
