"""Risk-adjusted performance metrics"""

import math
from typing import Sequence

from ..data.models import OperationRecord
from ..models.metrics import RiskMetrics
from .aggregator import daily_results


def calculate_sharpe_ratio(returns: Sequence[float], risk_free_rate: float = 0.0) -> float:
    """
    Per-day Sharpe ratio using the population standard deviation.

    Returns:
        Sharpe ratio, 0 when there are no returns or they do not vary
    """
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return 0.0

    return (mean - risk_free_rate) / std_dev


def calculate_max_drawdown(returns: Sequence[float]) -> float:
    """Largest drop in currency of the cumulative curve below its running peak (peak starts at 0)."""
    peak = 0.0
    accumulated = 0.0
    max_drawdown = 0.0

    for result in returns:
        accumulated += result
        peak = max(peak, accumulated)
        max_drawdown = max(max_drawdown, peak - accumulated)

    return max_drawdown


def calculate_drawdown_durations(returns: Sequence[float]) -> list[int]:
    """
    Length in days of every underwater period of the cumulative curve.

    A period starts on the first day below the running peak and ends on the
    day a new peak is made. A period still open at the end runs to the last day.
    """
    durations = []
    start = None
    peak = 0.0
    accumulated = 0.0

    for index, result in enumerate(returns):
        accumulated += result

        if accumulated > peak:
            if start is not None:
                durations.append(index - start)
                start = None
            peak = accumulated
        elif accumulated < peak and start is None:
            start = index

    if start is not None:
        durations.append(len(returns) - 1 - start)

    return durations


def compute_risk_metrics(records: Sequence[OperationRecord]) -> RiskMetrics:
    """
    Compute risk metrics for a set of records.

    Sharpe, drawdown and duration figures use daily net results; profit
    factor and expectancy use individual trades.

    Args:
        records: Trade records in any order

    Returns:
        RiskMetrics, all zeros for empty input
    """
    if not records:
        return RiskMetrics()

    returns = daily_results(records)

    gains = sum(r.result for r in records if r.result > 0)
    losses = abs(sum(r.result for r in records if r.result < 0))
    winning = sum(1 for r in records if r.result > 0)
    losing = sum(1 for r in records if r.result < 0)

    if losses != 0:
        profit_factor = gains / losses
    else:
        profit_factor = math.inf if gains > 0 else 0.0

    avg_win = gains / winning if winning else 0.0
    avg_loss = losses / losing if losing else 0.0
    expectancy = (winning / len(records)) * avg_win - (losing / len(records)) * avg_loss

    max_drawdown = calculate_max_drawdown(returns)
    total = sum(r.result for r in records)
    recovery_factor = total / max_drawdown if max_drawdown != 0 else 0.0

    durations = calculate_drawdown_durations(returns)

    return RiskMetrics(
        sharpe_ratio=calculate_sharpe_ratio(returns),
        max_drawdown=max_drawdown,
        profit_factor=profit_factor if math.isfinite(profit_factor) else 0.0,
        expectancy=expectancy,
        recovery_factor=recovery_factor,
        avg_drawdown_duration=sum(durations) / len(durations) if durations else 0.0,
    )
