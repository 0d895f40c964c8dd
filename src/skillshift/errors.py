"""Custom exceptions for SkillShift.

This module defines the exception hierarchy used at the edges of the
generation pipeline. Malformed model output and invalid skills are never
raised; they are reported as data. Exceptions are reserved for transport
failures and invalid caller input.
"""

from typing import Any, Optional


class SkillShiftError(Exception):
    """Base exception for all SkillShift errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context information about the error
    """

    def __init__(
        self, message: str, error_code: str, context: Optional[dict[str, Any]] = None
    ) -> None:
        """Initialize SkillShift error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code
            context: Optional additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class CompletionError(SkillShiftError):
    """Raised when a text completion call fails at the transport level.

    Covers network errors, rate limits and provider-side failures. The
    generation core never retries these; they propagate to the caller.
    """

    def __init__(self, model: str, cause: Exception) -> None:
        """Initialize completion error.

        Args:
            model: Model the failed call was addressed to
            cause: Underlying provider or network exception
        """
        super().__init__(
            message=f"Completion call to '{model}' failed: {cause}",
            error_code="completion_failed",
            context={"model": model, "cause": type(cause).__name__},
        )
        self.model = model
        self.cause = cause


class InvalidIntentError(SkillShiftError):
    """Raised when a caller supplies an unusable intent."""

    def __init__(self, reason: str) -> None:
        """Initialize invalid intent error.

        Args:
            reason: Why the intent was rejected
        """
        super().__init__(message=reason, error_code="invalid_intent")
        self.reason = reason
