"""Domain-specific exceptions for Virtual Patient.

This module defines a hierarchical exception system for domain errors:

    DomainError (base)
    ├── ValidationError
    ├── ConversationNotFoundError
    ├── LLMError
    │   ├── LLMResponseParseError
    │   └── LLMTimeoutError
    └── GenerationError
        ├── UpstreamGenerationError
        └── MalformedReportError
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions should inherit from this class
    to allow for catching all domain errors with a single except clause.
    """


class ValidationError(DomainError):
    """Raised when caller input fails domain validation."""


class ConversationNotFoundError(DomainError):
    """Raised when a referenced conversation does not exist."""

    def __init__(self, conversation_id: str) -> None:
        """Initialize with the missing conversation id.

        Args:
            conversation_id: Identifier that could not be resolved.
        """
        self.conversation_id = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}")


class LLMError(DomainError):
    """Errors from completion service interactions.

    Base class for errors that occur during communication
    with the language model backend.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize with a message and optional HTTP status.

        Args:
            message: Description of the failure.
            status_code: HTTP status returned by the backend, if any.
        """
        self.status_code = status_code
        super().__init__(message)


class LLMResponseParseError(LLMError):
    """Raised when a completion response payload cannot be parsed."""

    def __init__(self, raw_response: str, parse_error: str) -> None:
        """Initialize with the raw response and parse error.

        Args:
            raw_response: The raw text returned by the backend.
            parse_error: Description of the parsing failure.
        """
        self.raw_response = raw_response
        self.parse_error = parse_error
        super().__init__(f"Failed to parse LLM response: {parse_error}")


class LLMTimeoutError(LLMError):
    """Raised when a completion request times out."""

    def __init__(self, timeout_seconds: int) -> None:
        """Initialize with the timeout duration.

        Args:
            timeout_seconds: The timeout duration in seconds.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(f"LLM request timed out after {timeout_seconds}s")


class GenerationError(DomainError):
    """Errors raised by the patient and report agents.

    Carries the failing operation name and the underlying cause so callers
    can log and pick a fallback.
    """

    def __init__(self, operation: str, message: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {message}")


class UpstreamGenerationError(GenerationError):
    """Raised when the completion call fails or returns empty content."""


class MalformedReportError(GenerationError):
    """Raised when report output violates the required shape or status values."""
