"""Schema validation for the result payloads handed to the journal UI."""

from typing import Any

import structlog

logger = structlog.get_logger(__name__)

SIGNAL_VALUES = ["LIGAR", "ALERTA", "NAO_LIGAR", "SEM_DADOS"]

CAPITAL_SCHEMA = {
    "type": "object",
    "required": ["trajectory", "finalBalance", "ruinDayIndex", "yieldPercent", "maxDrawdownPercent"],
    "properties": {
        "trajectory": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["dayIndex", "balance"],
                "properties": {
                    "dayIndex": {"type": "integer", "minimum": 0},
                    "balance": {"type": "number"},
                },
            },
            "minItems": 1,
            "description": "Balance per elapsed day, first point is the initial capital"
        },
        "finalBalance": {"type": "number"},
        "ruinDayIndex": {"type": ["integer", "null"], "minimum": 1},
        "yieldPercent": {"type": "number"},
        "maxDrawdownPercent": {"type": "number", "minimum": 0},
        "totalDays": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": True
}

MONTE_CARLO_SCHEMA = {
    "type": "object",
    "required": ["envelope", "profitProbability", "medianResult", "var95", "bestScenario95"],
    "properties": {
        "envelope": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["dayIndex", "best", "median", "worst"],
                "description": "worst <= median <= best at every index"
            },
            "minItems": 1,
        },
        "profitProbability": {"type": "number", "minimum": 0, "maximum": 100},
        "medianResult": {"type": "number"},
        "var95": {"type": "number"},
        "bestScenario95": {"type": "number"},
        "simulations": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": True
}

CROSS_VALIDATION_SCHEMA = {
    "type": "object",
    "required": ["cells", "summary"],
    "properties": {
        "cells": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["weekday", "hour", "historicalResult", "historicalOps",
                             "currentResult", "currentOps", "signal"],
                "properties": {
                    "signal": {"type": "string", "enum": SIGNAL_VALUES},
                },
            },
        },
        "summary": {
            "type": "object",
            "required": ["ligar", "alerta", "naoLigar", "semDados", "score"],
            "properties": {
                "score": {"type": "number", "minimum": 0, "maximum": 100},
            },
        },
    },
    "additionalProperties": True
}


class ResultValidationError(Exception):
    """Result payload validation error."""
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ResultValidator:
    """Validates result payloads against their schemas and invariants."""

    def __init__(self):
        self.logger = logger
        self.schemas = {
            "capital": CAPITAL_SCHEMA,
            "monte_carlo": MONTE_CARLO_SCHEMA,
            "cross_validation": CROSS_VALIDATION_SCHEMA,
        }

    def validate_capital(self, payload: dict[str, Any], initial_capital: Any = None) -> bool:
        """
        Validate a capital simulation payload.

        Args:
            payload: Output of CapitalSimulation.to_dict()
            initial_capital: When given, the first balance must equal it

        Returns:
            True if valid

        Raises:
            ResultValidationError: If validation fails
        """
        return self._validate("capital", payload, self._check_capital, initial_capital)

    def validate_monte_carlo(self, payload: dict[str, Any]) -> bool:
        """Validate a Monte Carlo payload; raises ResultValidationError."""
        return self._validate("monte_carlo", payload, self._check_monte_carlo)

    def validate_cross_validation(self, payload: dict[str, Any]) -> bool:
        """Validate a slot-grid payload; raises ResultValidationError."""
        return self._validate("cross_validation", payload, self._check_cross_validation)

    def get_schema(self, name: str) -> dict[str, Any]:
        """Get the JSON schema for a payload kind."""
        return self.schemas[name].copy()

    def _validate(self, name: str, payload: dict[str, Any], check, *args) -> bool:
        try:
            if not isinstance(payload, dict):
                raise ValueError(f"payload must be an object, got {type(payload).__name__}")
            self._validate_required_fields(self.schemas[name]["required"], payload)
            check(payload, *args)
            return True

        except (ValueError, TypeError, KeyError) as e:
            error_msg = f"{name} payload validation failed: {str(e)}"
            self.logger.error(error_msg, payload_kind=name)
            raise ResultValidationError(error_msg) from e

    @staticmethod
    def _validate_required_fields(required: list[str], payload: dict[str, Any]) -> None:
        missing_fields = [field for field in required if field not in payload]

        if missing_fields:
            raise ValueError(f"Missing required fields: {missing_fields}")

    def _check_capital(self, payload: dict[str, Any], initial_capital: Any) -> None:
        trajectory = payload["trajectory"]
        if not isinstance(trajectory, list) or not trajectory:
            raise ValueError("trajectory must be a non-empty array")

        for point in trajectory:
            self._validate_required_fields(["dayIndex", "balance"], point)
            if not _is_int(point["dayIndex"]) or point["dayIndex"] < 0:
                raise ValueError(f"Invalid dayIndex: {point['dayIndex']}")
            if not _is_number(point["balance"]):
                raise ValueError(f"Invalid balance: {point['balance']}")

        if trajectory[0]["dayIndex"] != 0:
            raise ValueError("trajectory must start at dayIndex 0")
        if initial_capital is not None and trajectory[0]["balance"] != initial_capital:
            raise ValueError(
                f"first balance {trajectory[0]['balance']} differs from initial capital {initial_capital}"
            )

        for name in ("finalBalance", "yieldPercent", "maxDrawdownPercent"):
            if not _is_number(payload[name]):
                raise ValueError(f"{name} must be a number, got: {payload[name]}")

        if payload["maxDrawdownPercent"] < 0:
            raise ValueError(f"maxDrawdownPercent must be non-negative, got: {payload['maxDrawdownPercent']}")

        ruin = payload["ruinDayIndex"]
        if ruin is not None and (not _is_int(ruin) or ruin < 1):
            raise ValueError(f"ruinDayIndex must be a positive integer or null, got: {ruin}")

    def _check_monte_carlo(self, payload: dict[str, Any]) -> None:
        envelope = payload["envelope"]
        if not isinstance(envelope, list) or not envelope:
            raise ValueError("envelope must be a non-empty array")

        for point in envelope:
            self._validate_required_fields(["dayIndex", "best", "median", "worst"], point)
            if not (point["worst"] <= point["median"] <= point["best"]):
                raise ValueError(f"Envelope out of order at day {point['dayIndex']}")

        probability = payload["profitProbability"]
        if not _is_number(probability) or not (0 <= probability <= 100):
            raise ValueError(f"profitProbability must be between 0-100, got: {probability}")

        if not (payload["var95"] <= payload["medianResult"] <= payload["bestScenario95"]):
            raise ValueError("var95 <= medianResult <= bestScenario95 does not hold")

    def _check_cross_validation(self, payload: dict[str, Any]) -> None:
        required = CROSS_VALIDATION_SCHEMA["properties"]["cells"]["items"]["required"]
        counts = {signal: 0 for signal in SIGNAL_VALUES}

        for cell in payload["cells"]:
            self._validate_required_fields(required, cell)
            if cell["signal"] not in SIGNAL_VALUES:
                raise ValueError(f"Invalid signal: {cell['signal']}")
            if (cell["historicalOps"] == 0 or cell["currentOps"] == 0) and cell["signal"] != "SEM_DADOS":
                raise ValueError(f"Slot {cell['weekday']} {cell['hour']}h has no data but is {cell['signal']}")
            counts[cell["signal"]] += 1

        summary = payload["summary"]
        self._validate_required_fields(CROSS_VALIDATION_SCHEMA["properties"]["summary"]["required"], summary)

        score = summary["score"]
        if not _is_number(score) or not (0 <= score <= 100):
            raise ValueError(f"score must be between 0-100, got: {score}")

        expected = {
            "ligar": counts["LIGAR"],
            "alerta": counts["ALERTA"],
            "naoLigar": counts["NAO_LIGAR"],
            "semDados": counts["SEM_DADOS"],
        }
        for key, value in expected.items():
            if summary[key] != value:
                raise ValueError(f"summary.{key} is {summary[key]} but cells contain {value}")


# Global validator instance
validator = ResultValidator()


def validate_capital(payload: dict[str, Any], initial_capital: Any = None) -> bool:
    """Convenience function to validate a capital payload."""
    return validator.validate_capital(payload, initial_capital)


def validate_monte_carlo(payload: dict[str, Any]) -> bool:
    """Convenience function to validate a Monte Carlo payload."""
    return validator.validate_monte_carlo(payload)


def validate_cross_validation(payload: dict[str, Any]) -> bool:
    """Convenience function to validate a slot-grid payload."""
    return validator.validate_cross_validation(payload)
