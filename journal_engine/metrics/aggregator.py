"""Daily, slot and monthly aggregation of trade records"""

from collections import defaultdict
from datetime import date
from typing import Iterable

from ..data.models import DailyAggregate, OperationRecord, SlotAggregate

SlotKey = tuple[int, int]

# Fixed slot grid: Mon-Fri (ISO weekdays) by 9h-17h inclusive
SESSION_WEEKDAYS = range(1, 6)
SESSION_HOURS = range(9, 18)


def aggregate_daily(records: Iterable[OperationRecord]) -> list[DailyAggregate]:
    """
    Group records by trading day.

    Single pass into a date-keyed mapping followed by a sorted extraction, so
    input order does not matter.

    Args:
        records: Trade records in any order

    Returns:
        One DailyAggregate per day, ascending by date
    """
    buckets: dict[date, list[float]] = defaultdict(list)
    for record in records:
        buckets[record.date].append(record.result)

    daily = []
    for day in sorted(buckets):
        results = buckets[day]
        daily.append(DailyAggregate(
            date=day,
            net_result=sum(results),
            ops_count=len(results),
            wins=sum(1 for r in results if r > 0),
            losses=sum(1 for r in results if r < 0),
            best_trade=max(results),
            worst_trade=min(results),
        ))
    return daily


def daily_results(records: Iterable[OperationRecord]) -> list[float]:
    """Net result per trading day, in date order."""
    return [day.net_result for day in aggregate_daily(records)]


def in_session(record: OperationRecord) -> bool:
    """Check whether a record falls inside the weekday × hour grid."""
    return record.weekday in SESSION_WEEKDAYS and record.hour in SESSION_HOURS


def aggregate_slots(records: Iterable[OperationRecord]) -> dict[SlotKey, SlotAggregate]:
    """
    Sum results and count operations per (weekday, hour) slot.

    Records on weekends or outside the session hours are dropped, and slots
    without records are absent from the mapping.

    Args:
        records: Trade records in any order

    Returns:
        Mapping of (ISO weekday, hour) to SlotAggregate
    """
    totals: dict[SlotKey, float] = defaultdict(float)
    counts: dict[SlotKey, int] = defaultdict(int)

    for record in records:
        if not in_session(record):
            continue
        key = (record.weekday, record.hour)
        totals[key] += record.result
        counts[key] += 1

    return {
        key: SlotAggregate(weekday=key[0], hour=key[1], net_result=totals[key], ops_count=counts[key])
        for key in counts
    }


def aggregate_monthly(records: Iterable[OperationRecord]) -> dict[str, float]:
    """Net result per calendar month keyed by 'YYYY-MM', ascending."""
    months: dict[str, float] = defaultdict(float)
    for record in records:
        months[record.year_month] += record.result
    return {month: months[month] for month in sorted(months)}
