"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, time, timedelta
from typing import Any, Callable, Dict, List, Optional

from journal_engine.data.models import DailyAggregate, OperationRecord


class SequenceSource:
    """Random source replaying fixed values in a cycle."""

    def __init__(self, values: List[float]):
        self.values = values
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def make_record() -> Callable[..., OperationRecord]:
    """Factory for OperationRecord from a 'YYYY-MM-DD' day."""
    def _make(day: str, result: float, hour: int = 10, minute: int = 0,
              contracts: int = 1, strategy: Optional[str] = None) -> OperationRecord:
        return OperationRecord(
            date=date.fromisoformat(day),
            time=time(hour, minute),
            result=result,
            contracts=contracts,
            strategy=strategy,
        )
    return _make


@pytest.fixture
def make_daily() -> Callable[..., List[DailyAggregate]]:
    """Factory for consecutive single-trade DailyAggregate values."""
    def _make(results: List[float], start: date = date(2024, 1, 1)) -> List[DailyAggregate]:
        return [
            DailyAggregate(
                date=start + timedelta(days=i),
                net_result=value,
                ops_count=1,
                wins=1 if value > 0 else 0,
                losses=1 if value < 0 else 0,
                best_trade=value,
                worst_trade=value,
            )
            for i, value in enumerate(results)
        ]
    return _make


@pytest.fixture
def sequence_source() -> Callable[[List[float]], SequenceSource]:
    """Factory for deterministic random sources."""
    return SequenceSource


@pytest.fixture
def scenario_a_operations() -> List[Dict[str, Any]]:
    """Five trading days with results 100, -50, 200, -30, 80."""
    return [
        {"date": "2024-01-01", "time": "09:15:00", "result": 100.0, "contracts": 1, "strategy": "Apollo"},
        {"date": "2024-01-02", "time": "10:30:00", "result": -50.0, "contracts": 1, "strategy": "Apollo"},
        {"date": "2024-01-03", "time": "11:00:00", "result": 120.0, "contracts": 2, "strategy": "Zeus"},
        {"date": "2024-01-03", "time": "14:45:00", "result": 80.0, "contracts": 2, "strategy": "Zeus"},
        {"date": "2024-01-04", "time": "15:10:00", "result": -30.0, "contracts": 1, "strategy": "Apollo"},
        {"date": "2024-01-05", "time": "16:20:00", "result": 80.0, "contracts": 1, "strategy": None},
    ]


@pytest.fixture
def journal_operations() -> List[Dict[str, Any]]:
    """Rows as stored by the journal, with operation_date/operation_time keys."""
    return [
        {"operation_date": "2024-02-05", "operation_time": "09:05:00", "result": 45.5, "contracts": 1, "strategy": "Apollo"},
        {"operation_date": "2024-02-05", "operation_time": "13:40:00", "result": -12.0, "contracts": 1, "strategy": "Apollo"},
        {"operation_date": "2024-02-06", "operation_time": "10:10:00", "result": "30.25", "contracts": "2", "strategy": "Zeus"},
        {"operation_date": "2024-03-04", "operation_time": "09:30", "result": 18.0, "contracts": 1, "strategy": "Zeus"},
        {"operation_date": "2024-03-05", "operation_time": "16:00:00", "result": -22.0, "contracts": 1, "strategy": ""},
    ]
