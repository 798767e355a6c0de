"""
Monte Carlo resampling of daily results.

Each run is a uniformly random permutation of the historical daily results
(sampling without replacement), so every run keeps the exact multiset of
outcomes and only their order changes. The spread between runs therefore
measures sequencing risk, not magnitude.
"""

import asyncio
import math
import random
from typing import Optional, Protocol, Sequence

import structlog

from ..config.defaults import MonteCarloParams
from ..models.simulation import EnvelopePoint, MonteCarloResult
from ..utils.sampling import downsample

logger = structlog.get_logger(__name__)


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float: ...


def fisher_yates_shuffle(values: Sequence[float], rng: RandomSource) -> list[float]:
    """
    Return an unbiased random permutation of ``values``.

    Args:
        values: Values to permute; left untouched
        rng: Uniform random source

    Returns:
        Shuffled copy
    """
    shuffled = list(values)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def cumulative_path(values: Sequence[float]) -> list[float]:
    """Running sum starting at 0, length ``len(values) + 1``."""
    path = [0.0]
    total = 0.0
    for value in values:
        total += value
        path.append(total)
    return path


def percentile_index(count: int, percentile: float) -> int:
    """Index of ``percentile`` in an ascending sample of ``count`` values."""
    return min(int(math.floor(count * percentile)), count - 1)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


class MonteCarloSimulator:
    """Resamples daily results into a percentile envelope and risk figures"""

    def __init__(
        self,
        params: Optional[MonteCarloParams] = None,
        random_source: Optional[RandomSource] = None,
        max_points: int = 365
    ):
        self.params = params or MonteCarloParams()
        self.random_source = random_source or random.Random(self.params.seed)
        self.max_points = max_points

    def can_simulate(self, daily_results: Sequence[float]) -> bool:
        """Check whether there is enough history to resample"""
        return len(daily_results) >= self.params.min_days

    def run(self, daily_results: Sequence[float], simulations: Optional[int] = None) -> Optional[MonteCarloResult]:
        """
        Run the resampling.

        Args:
            daily_results: Net result per trading day; order is discarded
            simulations: Number of runs, defaults to the configured count

        Returns:
            MonteCarloResult, or None when history is too short
        """
        if not self.can_simulate(daily_results):
            logger.debug(
                "Not enough history for Monte Carlo",
                days=len(daily_results),
                required=self.params.min_days
            )
            return None

        runs = simulations if simulations is not None else self.params.simulations
        if runs <= 0:
            raise ValueError(f"simulations must be positive, got {runs}")

        finals = []
        paths = []
        for _ in range(runs):
            path = cumulative_path(fisher_yates_shuffle(daily_results, self.random_source))
            paths.append(path)
            finals.append(path[-1])

        finals.sort()
        worst_idx = percentile_index(runs, self.params.worst_percentile)
        median_idx = percentile_index(runs, self.params.median_percentile)
        best_idx = percentile_index(runs, self.params.best_percentile)

        envelope = self._build_envelope(paths, worst_idx, median_idx, best_idx)
        profit_count = sum(1 for value in finals if value > 0)

        return MonteCarloResult(
            envelope=downsample(envelope, self.max_points),
            profit_probability=profit_count / runs * 100.0,
            median_result=finals[median_idx],
            var95=finals[worst_idx],
            best_scenario95=finals[best_idx],
            simulations=runs,
            days=len(daily_results),
        )

    async def run_async(
        self,
        daily_results: Sequence[float],
        simulations: Optional[int] = None
    ) -> Optional[MonteCarloResult]:
        """Yield to the event loop once, then run the resampling"""
        await asyncio.sleep(0)
        return self.run(daily_results, simulations)

    def _build_envelope(
        self,
        paths: list[list[float]],
        worst_idx: int,
        median_idx: int,
        best_idx: int
    ) -> list[EnvelopePoint]:
        """Per-index cross-section of all paths, not three representative paths."""
        envelope = []
        for day_index in range(len(paths[0])):
            column = sorted(path[day_index] for path in paths)
            worst, median, best = column[worst_idx], column[median_idx], column[best_idx]

            if self.params.round_envelope:
                worst, median, best = (_round_half_up(v) for v in (worst, median, best))

            envelope.append(EnvelopePoint(
                day_index=day_index,
                best=best,
                median=median,
                worst=worst,
            ))
        return envelope
