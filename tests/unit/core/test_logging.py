"""Unit tests for structured logging setup."""

import structlog

from grouphub.core.config import Settings
from grouphub.core.logging import (
    LoggingContext,
    add_correlation_id,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    rename_message_field,
)


def test_add_correlation_id_keeps_existing():
    event = add_correlation_id(None, "info", {"correlation_id": "cid_1"})

    assert event["correlation_id"] == "cid_1"


def test_add_correlation_id_generates_one():
    event = add_correlation_id(None, "info", {})

    assert event["correlation_id"].startswith("cid_")


def test_rename_message_field():
    event = rename_message_field(None, "info", {"event": "Group created"})

    assert event == {"message": "Group created"}


def test_configure_logging_json(capsys):
    """Test that production logging renders JSON lines."""
    configure_logging(Settings(_env_file=None, environment="production", log_format="json"))

    get_logger("grouphub.test").info("Group created", group_id="g1")

    output = capsys.readouterr().out
    assert '"message": "Group created"' in output
    assert '"group_id": "g1"' in output
    structlog.reset_defaults()


def test_logging_context_binds_and_unbinds():
    clear_context()

    with LoggingContext(uid="u1"):
        assert structlog.contextvars.get_contextvars() == {"uid": "u1"}

    assert structlog.contextvars.get_contextvars() == {}


def test_bind_correlation_id():
    clear_context()
    bind_correlation_id("cid_abc")

    assert structlog.contextvars.get_contextvars()["correlation_id"] == "cid_abc"
    clear_context()
