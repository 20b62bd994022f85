"""
Shared test fixtures and configuration for entire test suite.

Provides: connection profile, backend settings, backend client mocks, node channel mock
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cloudant_bridge.boundary.cloudant.client import CloudantError
from cloudant_bridge.configs.cloudant import CloudantSettings
from cloudant_bridge.models.connection import ConnectionProfile


@pytest.fixture
def profile() -> ConnectionProfile:
    """Provide a resolved connection profile."""
    return ConnectionProfile(account="acme", username="acme-user", password="s3cret")


@pytest.fixture
def cloudant_settings() -> CloudantSettings:
    """Provide backend settings independent of the environment."""
    return CloudantSettings(
        url_template="https://{account}.cloudant.test",
        timeout=5.0,
        max_insert_attempts=3,
        search_limit=200,
    )


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Create mock CloudantDatabase.

    Returns:
        MagicMock: Database handle with async document methods
    """
    db = MagicMock()
    db.name = "orders"
    db.insert = AsyncMock(return_value={"ok": True, "id": "doc-1", "rev": "1-abc"})
    db.destroy = AsyncMock(return_value={"ok": True, "id": "doc-1", "rev": "2-def"})
    db.get = AsyncMock(return_value={"_id": "doc-1", "_rev": "1-abc", "name": "widget"})
    db.search = AsyncMock(return_value={"total_rows": 0, "rows": []})
    db.list = AsyncMock(return_value={"total_rows": 0, "offset": 0, "rows": []})
    return db


@pytest.fixture
def mock_client(mock_db: MagicMock) -> MagicMock:
    """
    Create mock CloudantClient whose use() returns mock_db.

    Returns:
        MagicMock: Client with async account-level methods
    """
    client = MagicMock()
    client.use = MagicMock(return_value=mock_db)
    client.connect = AsyncMock(return_value={"ok": True})
    client.close = AsyncMock()
    client.list_databases = AsyncMock(return_value=["orders"])
    client.create_database = AsyncMock(return_value={"ok": True})
    return client


@pytest.fixture
def mock_channel() -> MagicMock:
    """Provide mock NodeChannel recording send/warn/error calls."""
    channel = MagicMock()
    channel.send = MagicMock()
    channel.warn = MagicMock()
    channel.error = MagicMock()
    return channel


@pytest.fixture
def db_missing() -> CloudantError:
    """Backend error for an insert into a database that does not exist."""
    return CloudantError(404, error="not_found", reason="Database does not exist.")


@pytest.fixture
def doc_missing() -> CloudantError:
    """Backend error for a document that does not exist."""
    return CloudantError(404, error="not_found", reason="missing")
