"""Headline performance statistics for the operations dashboard"""

from typing import Sequence

from ..data.models import OperationRecord
from ..models.metrics import PerformanceSummary
from .aggregator import aggregate_monthly, daily_results


def longest_runs(returns: Sequence[float]) -> tuple[int, int]:
    """
    Longest run of positive days and of negative days.

    Flat days neither extend nor break a run.

    Returns:
        (longest positive run, longest negative run)
    """
    positive = negative = 0
    max_positive = max_negative = 0

    for result in returns:
        if result > 0:
            positive += 1
            negative = 0
            max_positive = max(max_positive, positive)
        elif result < 0:
            negative += 1
            positive = 0
            max_negative = max(max_negative, negative)

    return max_positive, max_negative


def summarize_performance(records: Sequence[OperationRecord]) -> PerformanceSummary:
    """
    Summarize trades, days and months.

    Args:
        records: Trade records in any order

    Returns:
        PerformanceSummary, all zeros for empty input
    """
    if not records:
        return PerformanceSummary()

    returns = daily_results(records)
    results = [r.result for r in records]
    wins = [r for r in results if r > 0]
    losses = [r for r in results if r < 0]

    positive_days = sum(1 for r in returns if r > 0)
    negative_days = sum(1 for r in returns if r < 0)

    average_win = sum(wins) / len(wins) if wins else 0.0
    average_loss = abs(sum(losses) / len(losses)) if losses else 0.0

    monthly = list(aggregate_monthly(records).values())
    positive_months = sum(1 for r in monthly if r > 0)
    negative_months = sum(1 for r in monthly if r < 0)

    positive_streak, negative_streak = longest_runs(returns)

    return PerformanceSummary(
        total_operations=len(records),
        positive_days=positive_days,
        negative_days=negative_days,
        win_rate=positive_days / len(returns) * 100.0,
        total_result=sum(results),
        best_result=max(results),
        worst_result=min(results),
        positive_streak=positive_streak,
        negative_streak=negative_streak,
        payoff=average_win / average_loss if average_loss > 0 else 0.0,
        average_win=average_win,
        average_loss=average_loss,
        positive_months=positive_months,
        negative_months=negative_months,
        monthly_consistency=positive_months / len(monthly) * 100.0,
        average_monthly_result=sum(monthly) / len(monthly),
    )
