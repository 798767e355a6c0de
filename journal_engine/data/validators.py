"""Precondition checks for trade records entering the engine."""

import math
from datetime import date, time

from ..errors import MalformedDataError
from .models import OperationRecord


def validate_record(record: OperationRecord) -> None:
    """
    Check that a record satisfies the engine's input contract.

    Raises:
        MalformedDataError: If a field has the wrong type or a non-finite value
    """
    if not isinstance(record.date, date):
        raise MalformedDataError(f"Invalid date type: {type(record.date).__name__}")
    if not isinstance(record.time, time):
        raise MalformedDataError(f"Invalid time type: {type(record.time).__name__}")

    if isinstance(record.result, bool) or not isinstance(record.result, (int, float)):
        raise MalformedDataError(f"Invalid result type: {type(record.result).__name__}")
    if math.isnan(record.result) or math.isinf(record.result):
        raise MalformedDataError(f"Non-finite result: {record.result}")

    if isinstance(record.contracts, bool) or not isinstance(record.contracts, int):
        raise MalformedDataError(f"Invalid contracts type: {type(record.contracts).__name__}")
    if record.contracts < 0:
        raise MalformedDataError(f"Negative contracts: {record.contracts}")

    if record.strategy is not None and not isinstance(record.strategy, str):
        raise MalformedDataError(f"Invalid strategy type: {type(record.strategy).__name__}")
