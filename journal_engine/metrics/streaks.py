"""Win/loss streak detection and recovery statistics over daily results"""

from typing import Sequence

from ..data.models import DailyAggregate
from ..models.metrics import StreakReport


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def single_day_recovery(daily: Sequence[DailyAggregate]) -> list[float]:
    """
    Results of the days that immediately follow a losing day.

    Args:
        daily: Daily aggregates ascending by date

    Returns:
        One value per losing day that has a next day
    """
    return [
        daily[i + 1].net_result
        for i in range(len(daily) - 1)
        if daily[i].net_result < 0
    ]


def analyze_streaks(daily: Sequence[DailyAggregate], min_streak_length: int = 2) -> StreakReport:
    """
    Compute streak lengths and both recovery statistics.

    The streak counter is signed: positive while consecutive days are
    positive, negative while they are negative. A day of exactly zero resets
    it. When a run of at least ``min_streak_length`` days is ended by a day of
    the opposite sign, that day's result is recorded against the run.

    Args:
        daily: Daily aggregates ascending by date
        min_streak_length: Shortest run whose follow-up day is recorded

    Returns:
        StreakReport; all zeros for empty input
    """
    if not daily:
        return StreakReport()

    max_win_streak = 0
    max_loss_streak = 0
    current_streak = 0
    after_win_streak: list[float] = []
    after_loss_streak: list[float] = []

    for day in daily:
        result = day.net_result

        if result > 0:
            if current_streak <= -min_streak_length:
                after_loss_streak.append(result)
            current_streak = current_streak + 1 if current_streak > 0 else 1
            max_win_streak = max(max_win_streak, current_streak)
        elif result < 0:
            if current_streak >= min_streak_length:
                after_win_streak.append(result)
            current_streak = current_streak - 1 if current_streak < 0 else -1
            max_loss_streak = max(max_loss_streak, -current_streak)
        else:
            current_streak = 0

    recovery = single_day_recovery(daily)
    recovery_rate = (
        sum(1 for r in recovery if r > 0) / len(recovery) * 100 if recovery else 0.0
    )

    return StreakReport(
        max_win_streak=max_win_streak,
        max_loss_streak=max_loss_streak,
        after_win_streak_results=tuple(after_win_streak),
        after_loss_streak_results=tuple(after_loss_streak),
        avg_after_win_streak=_mean(after_win_streak),
        avg_after_loss_streak=_mean(after_loss_streak),
        avg_recovery_after_loss=_mean(recovery),
        recovery_rate=recovery_rate,
        recovery_events=len(recovery),
    )
