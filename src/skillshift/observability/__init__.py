"""Observability module: structured logging with correlation ids."""

from skillshift.observability.logging import (
    bound_correlation_id,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    new_correlation_id,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    "bound_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
    "get_logger",
    "new_correlation_id",
    "set_correlation_id",
    "setup_logging",
]
