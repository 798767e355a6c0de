"""
Slot signal classification module.

Compares historical and current-month performance per weekday × hour slot
and labels each slot LIGAR, ALERTA, NAO_LIGAR or SEM_DADOS.
"""

from .classifier import CrossValidationClassifier, calculate_score, classify_slot, partition_by_month

__all__ = [
    "CrossValidationClassifier",
    "calculate_score",
    "classify_slot",
    "partition_by_month",
]
