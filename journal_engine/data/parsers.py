"""
Parsers converting the journal's raw operation rows into OperationRecord.

Rows use either the interface keys (``date``, ``time``) or the journal's
storage keys (``operation_date``, ``operation_time``). Dates are
``YYYY-MM-DD``; times are ``HH:MM`` or ``HH:MM:SS``.
"""

import math
from datetime import date, datetime, time
from typing import Any, Iterable, Optional, Union

import structlog

from ..errors import MalformedDataError, MissingDataError
from .models import OperationRecord
from .validators import validate_record

logger = structlog.get_logger(__name__)

RawOperation = Union[dict[str, Any], OperationRecord]

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ("%H:%M:%S", "%H:%M")


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def parse_date(value: Any) -> date:
    """Parse a trading day from a ``YYYY-MM-DD`` string or date object."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedDataError(
            f"Invalid date type: {type(value).__name__}",
            raw_data=str(value),
            expected_format="YYYY-MM-DD",
        )
    try:
        return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()
    except ValueError as e:
        raise MalformedDataError(
            f"Invalid date: {value!r}",
            raw_data=value,
            expected_format="YYYY-MM-DD",
        ) from e


def parse_time(value: Any) -> time:
    """Parse a time of day from ``HH:MM[:SS]`` or a time object."""
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise MalformedDataError(
            f"Invalid time type: {type(value).__name__}",
            raw_data=str(value),
            expected_format="HH:MM:SS",
        )

    text = value.strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue

    raise MalformedDataError(
        f"Invalid time: {value!r}",
        raw_data=value,
        expected_format="HH:MM:SS",
    )


def parse_result(value: Any) -> float:
    """Parse a signed trade result; strings are accepted, NaN/inf are not."""
    if isinstance(value, bool):
        raise MalformedDataError(f"Invalid result type: {type(value).__name__}", raw_data=str(value))
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(f"Invalid result: {value!r}", raw_data=str(value)) from e

    if math.isnan(result) or math.isinf(result):
        raise MalformedDataError(f"Non-finite result: {value!r}", raw_data=str(value))
    return result


def parse_contracts(value: Any) -> int:
    """Parse a contract count; defaults to 1 when absent."""
    if value is None:
        return 1
    if isinstance(value, bool):
        raise MalformedDataError(f"Invalid contracts type: {type(value).__name__}", raw_data=str(value))
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedDataError(f"Contracts must be whole: {value!r}", raw_data=str(value))
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(f"Invalid contracts: {value!r}", raw_data=str(value)) from e


def parse_operation(raw: RawOperation) -> OperationRecord:
    """
    Parse one raw operation row.

    Args:
        raw: Row dictionary or an already-built OperationRecord

    Returns:
        Validated OperationRecord

    Raises:
        MissingDataError: If date, time or result is absent
        MalformedDataError: If a field cannot be converted
    """
    if isinstance(raw, OperationRecord):
        validate_record(raw)
        return raw

    if not isinstance(raw, dict):
        raise MalformedDataError(
            f"Operation must be a mapping, got {type(raw).__name__}",
            raw_data=str(raw)[:100],
        )

    raw_date = _pick(raw, "date", "operation_date")
    raw_time = _pick(raw, "time", "operation_time")
    raw_result = _pick(raw, "result")

    missing = [
        name for name, value in (("date", raw_date), ("time", raw_time), ("result", raw_result))
        if value is None
    ]
    if missing:
        raise MissingDataError(
            f"Operation missing required fields: {missing}",
            data_type="operation",
            context={"missing_fields": missing},
        )

    strategy: Optional[str] = raw.get("strategy")
    if strategy is not None:
        strategy = str(strategy).strip() or None

    record = OperationRecord(
        date=parse_date(raw_date),
        time=parse_time(raw_time),
        result=parse_result(raw_result),
        contracts=parse_contracts(raw.get("contracts")),
        strategy=strategy,
    )
    validate_record(record)
    return record


def parse_operations(rows: Iterable[RawOperation], skip_invalid: bool = False) -> list[OperationRecord]:
    """
    Parse a batch of raw operation rows.

    Args:
        rows: Raw rows or records
        skip_invalid: Log and drop unparseable rows instead of raising

    Returns:
        Records in input order
    """
    records = []
    skipped = 0

    for index, row in enumerate(rows):
        try:
            records.append(parse_operation(row))
        except (MissingDataError, MalformedDataError) as e:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning("Skipping invalid operation", index=index, error=str(e))

    if skipped:
        logger.info("Operations parsed with rejections", parsed=len(records), skipped=skipped)

    return records
