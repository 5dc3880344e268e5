"""Tests for structured logging context helpers."""

import structlog

from search_summarizer.observability import (
    bind_request_context,
    clear_request_context,
    get_workflow_logger,
    setup_structured_logging,
)


def test_bind_and_clear_request_context():
    bind_request_context(7, "capital of France")
    try:
        context = structlog.contextvars.get_contextvars()
        assert context["request_id"] == 7
        assert context["query"] == "capital of France"
    finally:
        clear_request_context()

    assert structlog.contextvars.get_contextvars() == {}


def test_long_query_truncated_in_context():
    bind_request_context(1, "x" * 500)
    try:
        assert len(structlog.contextvars.get_contextvars()["query"]) == 100
    finally:
        clear_request_context()


def test_setup_is_idempotent():
    setup_structured_logging("INFO")
    setup_structured_logging("DEBUG", json_logs=True)
    assert get_workflow_logger() is not None
