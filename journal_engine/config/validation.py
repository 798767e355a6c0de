"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_monte_carlo_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Monte Carlo parameters."""
        errors = []

        if "simulations" in params:
            value = params["simulations"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="simulations",
                    message="Must be a positive integer",
                    value=value
                ))

        if "min_days" in params:
            value = params["min_days"]
            if not _is_int(value) or value < 2:
                errors.append(ValidationError(
                    field="min_days",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        for name in ("worst_percentile", "median_percentile", "best_percentile"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value >= 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number in [0, 1)",
                        value=value
                    ))

        worst = params.get("worst_percentile")
        median = params.get("median_percentile")
        best = params.get("best_percentile")
        if all(_is_number(v) for v in (worst, median, best)) and not (worst <= median <= best):
            errors.append(ValidationError(
                field="percentiles",
                message="Must satisfy worst <= median <= best",
                value=(worst, median, best)
            ))

        if "round_envelope" in params and not isinstance(params["round_envelope"], bool):
            errors.append(ValidationError(
                field="round_envelope",
                message="Must be a boolean",
                value=params["round_envelope"]
            ))

        if "seed" in params and params["seed"] is not None and not _is_int(params["seed"]):
            errors.append(ValidationError(
                field="seed",
                message="Must be an integer or null",
                value=params["seed"]
            ))

        return errors

    @staticmethod
    def validate_capital_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate capital simulation parameters."""
        errors = []

        value = params.get("default_initial_capital")
        if value is not None and (not _is_number(value) or value <= 0):
            errors.append(ValidationError(
                field="default_initial_capital",
                message="Must be a positive number or null",
                value=value
            ))

        return errors

    @staticmethod
    def validate_streak_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate streak parameters."""
        errors = []

        if "min_streak_length" in params:
            value = params["min_streak_length"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="min_streak_length",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pattern_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pattern ranking parameters."""
        errors = []

        for name, value in params.items():
            if name == "morning_cutoff_hour":
                if not _is_int(value) or not (0 <= value <= 23):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be an hour between 0 and 23",
                        value=value
                    ))
            elif not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_presentation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate presentation parameters."""
        errors = []

        if "max_chart_points" in params:
            value = params["max_chart_points"]
            if not _is_int(value) or value < 2:
                errors.append(ValidationError(
                    field="max_chart_points",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        validators = {
            "monte_carlo": ConfigValidator.validate_monte_carlo_params,
            "capital": ConfigValidator.validate_capital_params,
            "streaks": ConfigValidator.validate_streak_params,
            "patterns": ConfigValidator.validate_pattern_params,
            "presentation": ConfigValidator.validate_presentation_params,
        }

        # The slot grid is fixed to Mon-Fri 9h-17h and has no section
        for section in config:
            if section not in validators:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        for section, validate in validators.items():
            if isinstance(config.get(section), dict):
                errors.extend(validate(config[section]))

        return errors
