"""Tests for structured logging.

Tests verify logging setup, context binding, and output formats.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from virtual_patient.config import LoggingSettings
from virtual_patient.infrastructure.logging import (
    bind_context,
    get_logger,
    logging_context,
    setup_logging,
    unbind_context,
)

pytestmark = pytest.mark.unit


def _read_json_log(capsys: pytest.CaptureFixture[str]) -> dict[str, object]:
    output = capsys.readouterr().out.strip().splitlines()
    assert output, "No log output captured"
    return json.loads(output[-1])


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_setup_logging_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format should configure structlog correctly."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=False))

        logger = get_logger("test.json")
        logger.info("test message", key="value")

        payload = _read_json_log(capsys)
        assert payload["event"] == "test message"
        assert payload["key"] == "value"
        assert payload["level"] == "info"
        assert payload["logger"] == "test.json"
        assert "timestamp" in payload

    def test_setup_logging_json_without_timestamp(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Timestamp should be omitted when disabled."""
        setup_logging(
            LoggingSettings(
                level="INFO", format="json", include_timestamp=False, include_caller=False
            )
        )

        get_logger("test.json.no_ts").info("test message")

        assert "timestamp" not in _read_json_log(capsys)

    def test_setup_logging_includes_caller(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Callsite parameters should be added when enabled."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=True))

        get_logger("test.json.caller").info("with caller")

        payload = _read_json_log(capsys)
        assert payload["func_name"] == "test_setup_logging_includes_caller"
        assert "lineno" in payload

    def test_setup_logging_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console format should configure structlog correctly."""
        setup_logging(LoggingSettings(level="INFO", format="console", include_caller=False))

        get_logger("test.console").info("test message", key="value")

        output = capsys.readouterr().out
        assert "test message" in output
        assert "value" in output

    def test_setup_logging_sets_log_level(self) -> None:
        """Should set the correct log level."""
        setup_logging(LoggingSettings(level="WARNING", format="json"))
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_silences_noisy_libraries(self) -> None:
        """Should silence httpx and httpcore."""
        setup_logging(LoggingSettings(level="DEBUG", format="json"))

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_setup_logging_without_settings(self) -> None:
        """Should work with default settings when None passed."""
        setup_logging(None)
        assert logging.getLogger().level == logging.INFO


class TestContextBinding:
    """Tests for context variable binding."""

    def test_bind_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should bind context variables."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=False))
        structlog.contextvars.clear_contextvars()

        bind_context(conversation_id="abc", turn=3)
        get_logger("test.context").info("bound message")

        payload = _read_json_log(capsys)
        assert payload["conversation_id"] == "abc"
        assert payload["turn"] == 3
        structlog.contextvars.clear_contextvars()

    def test_unbind_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should unbind context variables."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=False))
        structlog.contextvars.clear_contextvars()
        bind_context(key1="value1", key2="value2")

        unbind_context("key1", "key2")
        get_logger("test.unbind").info("after unbind")

        payload = _read_json_log(capsys)
        assert "key1" not in payload
        assert "key2" not in payload

    def test_logging_context_scopes_variables(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Context should apply inside the block only."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=False))
        structlog.contextvars.clear_contextvars()
        logger = get_logger("test.scoped")

        with logging_context(conversation_id="xyz"):
            logger.info("inside")
            inside = _read_json_log(capsys)
        logger.info("outside")
        outside = _read_json_log(capsys)

        assert inside["conversation_id"] == "xyz"
        assert "conversation_id" not in outside

    def test_logging_context_unbinds_on_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Context should be removed even when the block raises."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=False))
        structlog.contextvars.clear_contextvars()

        with pytest.raises(RuntimeError), logging_context(conversation_id="err"):
            raise RuntimeError("boom")

        get_logger("test.scoped.error").info("after error")
        assert "conversation_id" not in _read_json_log(capsys)
