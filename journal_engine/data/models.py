"""
Canonical data models for trade records and their aggregates.

Records arrive already validated from the journal's import layer. Aggregates
are derived fresh on every call and never mutated.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class OperationRecord:
    """A single closed trade."""
    date: date                  # Trading day
    time: time                  # Time of day the trade was opened
    result: float               # Signed net result, fees included
    contracts: int              # Position size
    strategy: Optional[str] = None

    @property
    def year_month(self) -> str:
        """Calendar month token, e.g. '2024-03'."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    @property
    def weekday(self) -> int:
        """ISO weekday, Monday=1 .. Sunday=7."""
        return self.date.isoweekday()

    @property
    def hour(self) -> int:
        return self.time.hour


@dataclass(frozen=True)
class DailyAggregate:
    """All trades of one calendar day."""
    date: date
    net_result: float
    ops_count: int
    wins: int                   # Trades with result > 0
    losses: int                 # Trades with result < 0
    best_trade: float
    worst_trade: float

    @property
    def is_positive(self) -> bool:
        return self.net_result > 0

    @property
    def is_negative(self) -> bool:
        return self.net_result < 0


@dataclass(frozen=True)
class SlotAggregate:
    """Trades of one weekday × hour bucket within a partition."""
    weekday: int                # ISO weekday, 1..5
    hour: int                   # 9..17
    net_result: float = 0.0
    ops_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.ops_count > 0
