"""
Centralized logging configuration for the analytics engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the engine should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_simulation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for capital and Monte Carlo simulations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the simulation subsystem
    """
    return get_logger(name).bind(subsystem="simulation")


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for slot signal classification.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the signals subsystem
    """
    return get_logger(name).bind(
        subsystem="signals",
        audit_trail=True
    )


def log_slot_signal(
    logger: FilteringBoundLogger,
    weekday: str,
    hour: int,
    signal: str,
    historical_result: float,
    current_result: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a slot classification with standardized format.

    Args:
        logger: Structlog logger instance
        weekday: Weekday label of the slot
        hour: Hour of the slot
        signal: Signal assigned to the slot
        historical_result: Net result of the historical partition
        current_result: Net result of the current-period partition
        context: Additional context data
    """
    bound_logger = logger.bind(
        weekday=weekday,
        hour=hour,
        signal=signal,
        historical_result=historical_result,
        current_result=current_result,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Slot classified")


def log_simulation_summary(
    logger: FilteringBoundLogger,
    simulation: str,
    days: int,
    metrics: dict[str, Any],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the scalar outcome of a simulation.

    Args:
        logger: Structlog logger instance
        simulation: Simulation name ("capital" or "monte_carlo")
        days: Number of daily results the simulation consumed
        metrics: Scalar metrics reported by the simulation
        context: Additional context data
    """
    bound_logger = logger.bind(simulation=simulation, days=days, **metrics)

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Simulation completed")
