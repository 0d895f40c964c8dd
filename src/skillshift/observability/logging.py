"""Structured logging configuration with per-run correlation ids.

Sets up structlog on top of the standard library. Pipeline modules log through
``logging.getLogger(__name__)`` and the boundary layer emits structlog events;
both are rendered by one processor chain, so each record carries the id of the
generation or clarification run it belongs to.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

import structlog

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the current run's correlation id to a log event.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Event dictionary to modify

    Returns:
        Event dictionary with correlation_id when one is set
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    @property  # type: ignore[override]
    def stream(self) -> Any:
        return sys.stderr

    @stream.setter
    def stream(self, value: Any) -> None:
        pass


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, render JSON; otherwise use the console renderer

    Example:
        >>> setup_logging(log_level="INFO", json_logs=False)
        >>> get_logger(__name__).info("generation_started", intent_length=42)
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderers: list[Any] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    # Records from plain stdlib loggers go through the same chain
    handler = _StderrHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if isinstance(h, _StderrHandler)]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper()))

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _generate_correlation_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def new_correlation_id() -> str:
    """Generate a correlation id and make it current.

    Returns:
        The new correlation id
    """
    correlation_id = _generate_correlation_id()
    correlation_id_var.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current context.

    Args:
        correlation_id: Identifier shared by every event of one run
    """
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation id.

    Returns:
        Correlation id if set, None otherwise
    """
    return correlation_id_var.get()


def clear_correlation_id() -> None:
    """Clear the correlation id from the current context."""
    correlation_id_var.set(None)


@contextmanager
def bound_correlation_id(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Make a correlation id current for the duration of a block.

    The previous id is restored on exit. Async generators should bind the id
    around each step rather than across a ``yield``, since their body runs in
    the consumer's context.

    Args:
        correlation_id: Id to bind (a new one is generated when omitted)

    Yields:
        The bound correlation id
    """
    bound = correlation_id or _generate_correlation_id()
    token = correlation_id_var.set(bound)
    try:
        yield bound
    finally:
        correlation_id_var.reset(token)
