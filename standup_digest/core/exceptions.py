"""
Exception hierarchy for the Standup Digest service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StandupDigestException(Exception):
    """Base exception for all Standup Digest errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StandupDigestException):
    """Raised when request input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(StandupDigestException):
    """Raised at the boundary, before any model call, for unusable configuration."""


class InvalidChunkConfigError(ConfigurationError):
    """Raised when chunk size / overlap violate 0 <= overlap < size."""

    def __init__(self, chunk_size: int, chunk_overlap: int) -> None:
        super().__init__(
            f"Invalid chunk configuration: overlap {chunk_overlap} must be >= 0 "
            f"and smaller than chunk size {chunk_size}",
            {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
        )


class UnsupportedModelError(ConfigurationError):
    """Raised when a (provider, model) pair is not supported."""

    def __init__(self, provider: str, model: str) -> None:
        super().__init__(
            f"Unsupported model {model} for provider {provider}.",
            {"provider": provider, "model": model},
        )


class TokenizerUnavailableError(ConfigurationError):
    """Raised when the model's tokenizer cannot count tokens."""


class SummarizationError(StandupDigestException):
    """Base exception for summarization pipeline failures."""


class ModelInvocationError(SummarizationError):
    """Raised when a map, reduce or final model call fails."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize model invocation error.

        Args:
            message: Error message
            stage: Pipeline stage of the failed call (map, reduce, final, stuff)
            details: Additional context
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        self.stage = stage
        super().__init__(message, details)


class ReportParseError(SummarizationError):
    """Raised when model output does not match the structured report shape.

    The call itself succeeded; its content was unusable.
    """

    def __init__(
        self,
        message: str,
        raw_output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if raw_output is not None:
            details["raw_output_preview"] = raw_output[:200]
        self.raw_output = raw_output
        super().__init__(message, details)


class RecursionLimitExceededError(SummarizationError):
    """Raised when the collapse loop hits the round limit or a round cannot shrink the set."""

    def __init__(
        self,
        rounds: int,
        remaining_tokens: int,
        max_tokens: int,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Collapse did not converge after {rounds} rounds",
            {
                "rounds": rounds,
                "remaining_tokens": remaining_tokens,
                "max_tokens": max_tokens,
            },
        )


class SourceFetchError(StandupDigestException):
    """Raised when a document source (Slack, GitHub) fails."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)


class PublishingError(StandupDigestException):
    """Raised when publishing a finished report fails."""


class ObservabilityError(StandupDigestException):
    """Raised when observability operations fail (non-critical)."""

    pass
