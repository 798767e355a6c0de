"""
Error classification system for the analytics engine.

Data quality errors describe records or histories the engine cannot use;
system failures describe broken configuration or calculations.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    MetricsCalculationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "MetricsCalculationError",
    "ConfigurationError",
]
