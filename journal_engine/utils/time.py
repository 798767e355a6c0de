"""
Reference-date utilities for period partitioning.

The current period is always derived from an explicit reference date. The
wall clock is consulted only when a caller does not supply one.
"""

from datetime import date, datetime
from typing import Callable, Optional, Union

Clock = Callable[[], date]

# Grid labels cover trading weekdays only; names cover the whole week
WEEKDAY_LABELS = {1: "Seg", 2: "Ter", 3: "Qua", 4: "Qui", 5: "Sex"}
WEEKDAY_NAMES = {
    1: "Segunda",
    2: "Terça",
    3: "Quarta",
    4: "Quinta",
    5: "Sexta",
    6: "Sábado",
    7: "Domingo",
}


def system_today() -> date:
    """
    Today's date from the local wall clock.

    The current month follows the trader's own calendar, so a late trade on
    the last day of a month is not pushed into the next one by UTC.
    """
    return date.today()


def get_reference_date(
    reference: Optional[Union[date, datetime]] = None,
    clock: Optional[Clock] = None
) -> date:
    """
    Resolve the reference date used to split current and historical periods.

    Args:
        reference: Explicit reference date, preferred when given
        clock: Fallback clock, defaults to the local wall clock

    Returns:
        Reference date
    """
    if reference is not None:
        return reference.date() if isinstance(reference, datetime) else reference

    return (clock or system_today)()


def year_month(day: date) -> str:
    """Calendar month token, e.g. '2024-03'."""
    return f"{day.year:04d}-{day.month:02d}"


def weekday_label(iso_weekday: int) -> str:
    """Short Portuguese weekday label used on the slot grid."""
    return WEEKDAY_LABELS[iso_weekday]


def weekday_name(iso_weekday: int) -> str:
    """Full Portuguese weekday name used in pattern reports."""
    return WEEKDAY_NAMES[iso_weekday]
