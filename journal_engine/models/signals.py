"""Models for the historical vs current-period slot classifier."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SlotSignal(str, Enum):
    """Trading recommendation for a weekday × hour slot."""
    LIGAR = "LIGAR"                  # Both periods positive: trade the slot
    ALERTA = "ALERTA"                # Periods disagree in sign
    NAO_LIGAR = "NAO_LIGAR"          # Both periods flat or negative
    SEM_DADOS = "SEM_DADOS"          # A period has no operations in the slot


@dataclass(frozen=True)
class CrossValidationCell:
    """One slot of the grid with both partitions' raw figures."""
    weekday: str
    hour: int
    historical_result: float
    historical_ops: int
    current_result: float
    current_ops: int
    signal: SlotSignal

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekday": self.weekday,
            "hour": self.hour,
            "historicalResult": self.historical_result,
            "historicalOps": self.historical_ops,
            "currentResult": self.current_result,
            "currentOps": self.current_ops,
            "signal": self.signal.value,
        }


@dataclass(frozen=True)
class CrossValidationSummary:
    """Signal counts and the share of data-bearing slots worth trading."""
    ligar: int = 0
    alerta: int = 0
    nao_ligar: int = 0
    sem_dados: int = 0
    score: float = 0.0               # 0..100, SEM_DADOS excluded

    @property
    def slots_with_data(self) -> int:
        return self.ligar + self.alerta + self.nao_ligar

    def to_dict(self) -> dict[str, Any]:
        return {
            "ligar": self.ligar,
            "alerta": self.alerta,
            "naoLigar": self.nao_ligar,
            "semDados": self.sem_dados,
            "score": self.score,
        }


@dataclass(frozen=True)
class CrossValidationResult:
    """Full slot grid, hour-major, plus its summary."""
    reference_month: str
    cells: list[CrossValidationCell]
    summary: CrossValidationSummary

    def cell(self, weekday: str, hour: int) -> CrossValidationCell:
        """Look up a cell by weekday label and hour."""
        for cell in self.cells:
            if cell.weekday == weekday and cell.hour == hour:
                return cell
        raise KeyError(f"No slot for {weekday} {hour}h")

    def to_dict(self) -> dict[str, Any]:
        return {
            "cells": [cell.to_dict() for cell in self.cells],
            "summary": self.summary.to_dict(),
        }
