"""
Historical vs current-period slot classifier.

Splits records into the reference month and everything before or after it,
aggregates each partition by weekday × hour, and labels every slot by
whether both periods agree that it is profitable.
"""

from datetime import date
from typing import Sequence

from ..data.models import OperationRecord, SlotAggregate
from ..logging.config import get_signal_logger, log_slot_signal
from ..metrics.aggregator import SESSION_HOURS, SESSION_WEEKDAYS, aggregate_slots
from ..models.signals import (
    CrossValidationCell,
    CrossValidationResult,
    CrossValidationSummary,
    SlotSignal,
)
from ..utils.time import weekday_label, year_month

signal_logger = get_signal_logger(__name__)


def classify_slot(historical: SlotAggregate, current: SlotAggregate) -> SlotSignal:
    """
    Label one slot from its two partitions.

    Rules, first match wins:
        1. either partition has no operations -> SEM_DADOS
        2. both sums positive -> LIGAR
        3. both sums zero or negative -> NAO_LIGAR
        4. otherwise -> ALERTA
    """
    if not (historical.has_data and current.has_data):
        return SlotSignal.SEM_DADOS
    if historical.net_result > 0 and current.net_result > 0:
        return SlotSignal.LIGAR
    if historical.net_result <= 0 and current.net_result <= 0:
        return SlotSignal.NAO_LIGAR
    return SlotSignal.ALERTA


def calculate_score(ligar: int, alerta: int, nao_ligar: int) -> float:
    """Share of data-bearing slots labelled LIGAR, 0-100 (0 with no data)."""
    with_data = ligar + alerta + nao_ligar
    if with_data == 0:
        return 0.0
    return ligar / with_data * 100.0


def partition_by_month(
    records: Sequence[OperationRecord],
    reference_date: date
) -> tuple[list[OperationRecord], list[OperationRecord]]:
    """
    Split records into (historical, current) around the reference month.

    Returns:
        Records outside the reference month, records inside it
    """
    current_month = year_month(reference_date)
    historical, current = [], []
    for record in records:
        (current if record.year_month == current_month else historical).append(record)
    return historical, current


class CrossValidationClassifier:
    """Builds the weekday × hour signal grid"""

    def __init__(self):
        self.logger = signal_logger

    def classify(self, records: Sequence[OperationRecord], reference_date: date) -> CrossValidationResult:
        """
        Classify every slot of the session grid.

        Args:
            records: Trade records in any order
            reference_date: Any day of the month treated as the current period

        Returns:
            CrossValidationResult with cells ordered hour-major
        """
        historical_records, current_records = partition_by_month(records, reference_date)
        historical = aggregate_slots(historical_records)
        current = aggregate_slots(current_records)

        cells = []
        counts = {signal: 0 for signal in SlotSignal}

        for hour in SESSION_HOURS:
            for weekday in SESSION_WEEKDAYS:
                key = (weekday, hour)
                hist = historical.get(key, SlotAggregate(weekday=weekday, hour=hour))
                curr = current.get(key, SlotAggregate(weekday=weekday, hour=hour))

                signal = classify_slot(hist, curr)
                counts[signal] += 1

                cell = CrossValidationCell(
                    weekday=weekday_label(weekday),
                    hour=hour,
                    historical_result=hist.net_result,
                    historical_ops=hist.ops_count,
                    current_result=curr.net_result,
                    current_ops=curr.ops_count,
                    signal=signal,
                )
                cells.append(cell)

                if signal is not SlotSignal.SEM_DADOS:
                    log_slot_signal(
                        self.logger,
                        weekday=cell.weekday,
                        hour=hour,
                        signal=signal.value,
                        historical_result=hist.net_result,
                        current_result=curr.net_result,
                    )

        summary = CrossValidationSummary(
            ligar=counts[SlotSignal.LIGAR],
            alerta=counts[SlotSignal.ALERTA],
            nao_ligar=counts[SlotSignal.NAO_LIGAR],
            sem_dados=counts[SlotSignal.SEM_DADOS],
            score=calculate_score(
                counts[SlotSignal.LIGAR],
                counts[SlotSignal.ALERTA],
                counts[SlotSignal.NAO_LIGAR],
            ),
        )

        self.logger.debug(
            "Slot grid classified",
            reference_month=year_month(reference_date),
            historical_ops=len(historical_records),
            current_ops=len(current_records),
            score=summary.score,
        )

        return CrossValidationResult(
            reference_month=year_month(reference_date),
            cells=cells,
            summary=summary,
        )
