"""Unit tests for logging helpers."""

import structlog

from rolegate.core.logging import (
    LoggingContext,
    add_correlation_id,
    bind_correlation_id,
    clear_context,
    rename_message_field,
)


def test_add_correlation_id_keeps_bound_value():
    event = add_correlation_id(None, "info", {"correlation_id": "cid_abc"})

    assert event["correlation_id"] == "cid_abc"


def test_add_correlation_id_generates_when_missing():
    event = add_correlation_id(None, "info", {})

    assert event["correlation_id"].startswith("cid_")


def test_rename_message_field():
    event = rename_message_field(None, "info", {"event": "Role created"})

    assert event == {"message": "Role created"}


def test_logging_context_binds_and_unbinds():
    clear_context()
    bind_correlation_id("cid_request")

    with LoggingContext(principal_id="p-1", permission="doc:read"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["principal_id"] == "p-1"
        assert bound["permission"] == "doc:read"

    remaining = structlog.contextvars.get_contextvars()
    assert "principal_id" not in remaining
    assert remaining["correlation_id"] == "cid_request"

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}
