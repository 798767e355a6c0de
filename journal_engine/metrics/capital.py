"""Capital trajectory replay with drawdown and ruin tracking"""

from typing import Optional, Sequence

from ..data.models import DailyAggregate
from ..models.simulation import CapitalPoint, CapitalSimulation
from ..utils.sampling import downsample


def calculate_drawdown_pct(peak: float, balance: float) -> float:
    """
    Percentage decline of balance from its running peak.

    Drawdown = (peak - balance) / peak * 100, or 0 when the peak is not positive.
    """
    if peak <= 0:
        return 0.0

    return (peak - balance) / peak * 100.0


def simulate_capital(
    daily: Sequence[DailyAggregate],
    initial_capital: float,
    max_points: int = 365
) -> Optional[CapitalSimulation]:
    """
    Replay daily results against a starting capital.

    The series is replayed as-is: reaching zero records the ruin day but the
    replay continues to the last day. Scalar metrics come from the full
    trajectory; only the returned trajectory is thinned for presentation.

    Args:
        daily: Daily aggregates ascending by date
        initial_capital: Starting balance, must be positive
        max_points: Trajectory length above which it is downsampled

    Returns:
        CapitalSimulation, or None when capital is not positive or there are no days
    """
    if initial_capital <= 0 or not daily:
        return None

    balance = initial_capital
    peak = initial_capital
    max_drawdown = 0.0
    ruin_day: Optional[int] = None
    trajectory = [CapitalPoint(day_index=0, balance=initial_capital)]

    for index, day in enumerate(daily, start=1):
        balance += day.net_result

        if balance > peak:
            peak = balance
        max_drawdown = max(max_drawdown, calculate_drawdown_pct(peak, balance))

        if balance <= 0 and ruin_day is None:
            ruin_day = index

        trajectory.append(CapitalPoint(day_index=index, balance=balance))

    return CapitalSimulation(
        initial_capital=initial_capital,
        trajectory=downsample(trajectory, max_points),
        final_balance=balance,
        ruin_day_index=ruin_day,
        yield_percent=(balance - initial_capital) / initial_capital * 100.0,
        max_drawdown_percent=max_drawdown,
        total_days=len(daily),
    )
