"""
Test suite for the flow host seams: reporting channel, credential store
and connection registry.

System role: Verification of host-facing adapters
"""

import logging
from unittest.mock import MagicMock

import pytest

from cloudant_bridge.boundary.flow import (
    ConnectionRegistry,
    InMemoryCredentialStore,
    LoggingChannel,
    NodeCredentials,
)
from cloudant_bridge.core.exceptions import FieldRenameWarning
from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.observability import configure_logging, get_logger
from cloudant_bridge.observability.log_utils import log_with_context, safe_log_value


class TestLoggingChannel:
    """Test suite for LoggingChannel."""

    def test_send_forwards_to_callback(self) -> None:
        received = []
        channel = LoggingChannel("reader", on_send=received.append)

        channel.send({"payload": 1})

        assert received == [{"payload": 1}]

    def test_send_without_callback_drops(self, caplog: pytest.LogCaptureFixture) -> None:
        channel = LoggingChannel("reader")

        with caplog.at_level(logging.DEBUG, logger="cloudant_bridge"):
            channel.send({"payload": 1, "_msgid": "m1"})

        assert "Message dropped" in caplog.text

    def test_warn_logs_details(self, caplog: pytest.LogCaptureFixture) -> None:
        channel = LoggingChannel("writer")
        warning = FieldRenameWarning("_secret", "secret")

        with caplog.at_level(logging.WARNING):
            channel.warn(warning.message, warning)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "Property '_secret' renamed to 'secret'."
        assert record.node == "writer"
        assert "renamed" in record.context

    def test_error_logs_at_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        channel = LoggingChannel("writer")

        with caplog.at_level(logging.ERROR):
            channel.error("boom")

        assert caplog.records[-1].levelno == logging.ERROR


class TestCredentialsAndRegistry:
    """Test suite for credential store and connection registry."""

    def test_credential_store_roundtrip(self) -> None:
        store = InMemoryCredentialStore()
        store.add_credentials("conn-1", NodeCredentials(username="u", password="p"))

        assert store.get_credentials("conn-1").username == "u"
        store.delete_credentials("conn-1")
        assert store.get_credentials("conn-1") is None

    def test_password_not_in_repr(self) -> None:
        assert "p4ss" not in repr(NodeCredentials(username="u", password="p4ss"))

    def test_registry_profile(self, profile: ConnectionProfile) -> None:
        registry = ConnectionRegistry()
        node = MagicMock(id="conn-1", profile=profile)

        registry.register(node)

        assert registry.profile("conn-1") == profile
        assert registry.profile("other") is None
        registry.unregister("conn-1")
        assert registry.get("conn-1") is None


class TestLogUtils:
    """Test suite for structured logging helpers."""

    def test_safe_log_value_summarizes_collections(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_safe_log_value_truncates(self) -> None:
        assert safe_log_value("x" * 20, max_length=5).startswith("xxxxx... (truncated")

    def test_reserved_record_keys_are_prefixed(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("cloudant_bridge.test")

        with caplog.at_level(logging.INFO):
            log_with_context(logger, logging.INFO, "hello", name="orders", node="n")

        record = caplog.records[-1]
        assert record.ctx_name == "orders"
        assert record.node == "n"

    def test_configure_logging_installs_single_stdout_handler(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("debug")
            configure_logging("warning")

            assert len(root.handlers) == 1
            assert root.level == logging.WARNING
            assert get_logger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
