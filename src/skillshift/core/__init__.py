"""Core abstractions shared across layers."""

from skillshift.core.protocols import TextCompletion

__all__ = ["TextCompletion"]
