"""Service layer logging utilities.

Provides a namespaced logger per service module and a helper that logs an
operation together with its outcome and structured context.

Usage:
    from services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="replace_components",
        outcome="success",
        parent_item_id="6f0c...",
        component_count=4,
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "kitchen_costing.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger for a service module.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger named '<prefix>.<module>', e.g. 'kitchen_costing.services.traversal'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via 'extra' so handlers that understand
    structured records can pick the fields up individually.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g. "delete_item", "resolve")
        outcome: Outcome description (e.g. "success", "cycle_detected")
        level: Log level (default INFO). Use DEBUG for per-traversal findings.
        **context: Additional context fields (item ids, counts, ...)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
