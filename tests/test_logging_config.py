"""Tests for structured logging helpers."""

import json
import logging

from matlista.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    list_id_ctx,
    request_id_ctx,
)


def make_record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="matlista.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLoggingContext:
    """Tests for LoggingContext."""

    def test_sets_and_resets(self):
        with LoggingContext(request_id="req-1", list_id="week-42"):
            assert request_id_ctx.get() == "req-1"
            assert list_id_ctx.get() == "week-42"

        assert request_id_ctx.get() is None
        assert list_id_ctx.get() is None

    def test_nested_contexts(self):
        with LoggingContext(request_id="req-1"):
            with LoggingContext(list_id="week-42"):
                assert request_id_ctx.get() == "req-1"
                assert list_id_ctx.get() == "week-42"
            assert list_id_ctx.get() is None


class TestFormatters:
    """Tests for the log formatters."""

    def test_json_includes_context(self):
        with LoggingContext(request_id="req-1", list_id="week-42"):
            output = StructuredJsonFormatter().format(make_record("Lade till 3 dl grädde"))

        data = json.loads(output)
        assert data["message"] == "Lade till 3 dl grädde"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-1"
        assert data["list_id"] == "week-42"
        assert "grädde" in output

    def test_json_without_context(self):
        data = json.loads(StructuredJsonFormatter().format(make_record("hej")))
        assert "request_id" not in data
        assert "list_id" not in data

    def test_contextual_format(self):
        with LoggingContext(request_id="abcdefgh-1234", list_id="week-42"):
            output = ContextualFormatter().format(make_record("hej"))

        assert "[req=abcdefgh, list=week-42]" in output
        assert output.endswith("| matlista.test [req=abcdefgh, list=week-42] | hej")
