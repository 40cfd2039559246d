"""Tests for domain exceptions.

Tests verify exception hierarchy and message formatting.
"""

from __future__ import annotations

import pytest

from virtual_patient.domain.exceptions import (
    ConversationNotFoundError,
    DomainError,
    GenerationError,
    LLMError,
    LLMResponseParseError,
    LLMTimeoutError,
    MalformedReportError,
    UpstreamGenerationError,
    ValidationError,
)

pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize(
        ("child", "parent"),
        [
            (ValidationError, DomainError),
            (ConversationNotFoundError, DomainError),
            (LLMError, DomainError),
            (LLMResponseParseError, LLMError),
            (LLMTimeoutError, LLMError),
            (GenerationError, DomainError),
            (UpstreamGenerationError, GenerationError),
            (MalformedReportError, GenerationError),
        ],
    )
    def test_inheritance(self, child: type[Exception], parent: type[Exception]) -> None:
        assert issubclass(child, parent)

    def test_generation_errors_are_not_llm_errors(self) -> None:
        assert not issubclass(UpstreamGenerationError, LLMError)


class TestExceptionMessages:
    """Tests for exception attributes and messages."""

    def test_conversation_not_found(self) -> None:
        error = ConversationNotFoundError("abc123")
        assert error.conversation_id == "abc123"
        assert str(error) == "Conversation not found: abc123"

    def test_llm_error_status_code(self) -> None:
        error = LLMError("HTTP 503", status_code=503)
        assert error.status_code == 503

    def test_llm_timeout(self) -> None:
        error = LLMTimeoutError(30)
        assert error.timeout_seconds == 30
        assert "30s" in str(error)

    def test_llm_response_parse_error(self) -> None:
        error = LLMResponseParseError("not json", "Expecting value")
        assert error.raw_response == "not json"
        assert error.parse_error == "Expecting value"

    def test_generation_error_carries_operation_and_cause(self) -> None:
        cause = LLMTimeoutError(10)
        error = UpstreamGenerationError("next_patient_turn", "Completion call failed", cause)

        assert error.operation == "next_patient_turn"
        assert error.cause is cause
        assert str(error) == "next_patient_turn: Completion call failed"

    def test_generation_error_cause_defaults_to_none(self) -> None:
        assert MalformedReportError("synthesize_report", "bad").cause is None
