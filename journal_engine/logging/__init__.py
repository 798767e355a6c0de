"""
Logging configuration and utilities for the analytics engine.
"""
from .config import (
    configure_logging,
    get_logger,
    get_signal_logger,
    get_simulation_logger,
    log_simulation_summary,
    log_slot_signal,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_signal_logger",
    "get_simulation_logger",
    "log_simulation_summary",
    "log_slot_signal",
]
