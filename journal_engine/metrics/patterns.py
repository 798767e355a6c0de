"""Best and worst trading hours, weekdays and strategies"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Sequence

from ..config.defaults import PatternParams
from ..data.models import OperationRecord
from ..models.metrics import BucketPerformance, PatternReport, SessionPerformance
from ..utils.time import weekday_name


@dataclass
class _Tally:
    wins: int = 0
    total: int = 0
    result: float = 0.0

    def add(self, result: float) -> None:
        self.total += 1
        self.result += result
        if result > 0:
            self.wins += 1

    @property
    def win_rate(self) -> float:
        return self.wins / self.total * 100.0 if self.total else 0.0

    @property
    def avg_result(self) -> float:
        return self.result / self.total if self.total else 0.0


def _tally_by(records: Sequence[OperationRecord], key: Callable[[OperationRecord], Optional[Hashable]]) -> dict:
    tallies: dict = defaultdict(_Tally)
    for record in records:
        bucket = key(record)
        if bucket is not None:
            tallies[bucket].add(record.result)
    return tallies


def _bucket(label: str, tally: _Tally) -> BucketPerformance:
    return BucketPerformance(
        label=label,
        win_rate=tally.win_rate,
        avg_result=tally.avg_result,
        operations=tally.total,
    )


def rank_buckets(
    tallies: dict,
    min_ops: int,
    label: Callable[[Hashable], str],
    tie_break_on_average: bool = True
) -> tuple[Optional[BucketPerformance], Optional[BucketPerformance]]:
    """
    Pick the best and worst bucket by win rate.

    Buckets with fewer than ``min_ops`` operations are ignored. Ties on win
    rate go to the better (or worse) average result when
    ``tie_break_on_average`` is set; otherwise the first bucket seen wins.

    Returns:
        (best, worst), each None when no bucket qualifies
    """
    best: Optional[BucketPerformance] = None
    worst: Optional[BucketPerformance] = None

    for key in sorted(tallies):
        tally = tallies[key]
        if tally.total < min_ops:
            continue
        candidate = _bucket(label(key), tally)

        if best is None or candidate.win_rate > best.win_rate or (
            tie_break_on_average
            and candidate.win_rate == best.win_rate
            and candidate.avg_result > best.avg_result
        ):
            best = candidate

        if worst is None or candidate.win_rate < worst.win_rate or (
            tie_break_on_average
            and candidate.win_rate == worst.win_rate
            and candidate.avg_result < worst.avg_result
        ):
            worst = candidate

    return best, worst


def _session(tally: _Tally) -> SessionPerformance:
    return SessionPerformance(
        win_rate=tally.win_rate,
        avg_result=tally.avg_result,
        operations=tally.total,
    )


def analyze_patterns(
    records: Sequence[OperationRecord],
    params: Optional[PatternParams] = None
) -> Optional[PatternReport]:
    """
    Rank hours, weekdays and strategies and split morning from afternoon.

    Args:
        records: Trade records in any order
        params: Minimum operations per bucket and the morning cutoff hour

    Returns:
        PatternReport, or None when there are no records
    """
    if not records:
        return None

    params = params or PatternParams()

    by_hour = _tally_by(records, lambda r: r.hour)
    by_day = _tally_by(records, lambda r: r.weekday)
    by_strategy = _tally_by(records, lambda r: r.strategy)

    best_hour, worst_hour = rank_buckets(by_hour, params.min_hour_ops, lambda h: f"{h}h")
    best_day, worst_day = rank_buckets(by_day, params.min_weekday_ops, weekday_name)
    best_strategy, worst_strategy = rank_buckets(
        by_strategy, params.min_strategy_ops, str, tie_break_on_average=False
    )

    morning = _Tally()
    afternoon = _Tally()
    for record in records:
        (morning if record.hour < params.morning_cutoff_hour else afternoon).add(record.result)

    total = _Tally()
    for record in records:
        total.add(record.result)

    return PatternReport(
        total_operations=total.total,
        win_rate=total.win_rate,
        total_result=total.result,
        best_hour=best_hour,
        worst_hour=worst_hour,
        best_day=best_day,
        worst_day=worst_day,
        best_strategy=best_strategy,
        worst_strategy=worst_strategy,
        morning=_session(morning),
        afternoon=_session(afternoon),
    )
