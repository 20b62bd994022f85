"""
Exception and warning hierarchy for the Cloudant bridge.

Errors stop processing of the message (or node) they belong to. Warnings are
returned alongside a result and never raised; processing continues.
All of them carry a details dict for the node's reporting channel.

Dependencies: None (pure domain layer)
System role: Centralized failure taxonomy across the bridge
"""

from typing import Any


class CloudantBridgeException(Exception):
    """Base exception for all bridge errors."""

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


class ConfigurationError(CloudantBridgeException):
    """Raised when a node has no resolvable connection profile."""

    def __init__(
        self,
        message: str,
        node_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            node_id: Id of the node that failed to start
            details: Additional context
        """
        details = details or {}
        if node_id:
            details["node_id"] = node_id
        super().__init__(message, details)


class BackendError(CloudantBridgeException):
    """Raised when a backend call fails for any reason the gateway does not recover from."""

    def __init__(
        self,
        description: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize backend error.

        Args:
            description: Backend's human-readable description
            operation: Gateway operation that failed (insert, delete, get, search, list)
            status_code: HTTP status reported by the backend, None for transport failures
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.description = description
        self.status_code = status_code
        super().__init__(description, details)


class DatabaseUnavailable(CloudantBridgeException):
    """Raised when the database is still missing after the retry budget is spent."""

    def __init__(
        self,
        database: str,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize database unavailable error.

        Args:
            database: Target database name
            attempts: Create-then-retry cycles that were made
            details: Additional context
        """
        details = details or {}
        details.update({"database": database, "attempts": attempts})
        self.database = database
        super().__init__(
            f"Database '{database}' does not exist after {attempts} creation attempts",
            details,
        )


class MissingDeletePrecondition(CloudantBridgeException):
    """Raised when a delete is requested without both _id and _rev."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("_id and _rev are required to delete a document", details)


class ConflictingFieldName(CloudantBridgeException):
    """Raised when stripping the reserved prefix would overwrite an existing field."""

    def __init__(self, field: str, renamed: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize conflicting field error.

        Args:
            field: Original (prefixed) field name
            renamed: Name the field would have been renamed to
            details: Additional context
        """
        details = details or {}
        details.update({"field": field, "renamed": renamed})
        super().__init__(
            f"Cannot rename property '{field}' to '{renamed}': field already exists",
            details,
        )


class GatewayWarning(UserWarning):
    """Base class for non-fatal conditions reported through the warning channel."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class FieldRenameWarning(GatewayWarning):
    """A reserved-prefix field was renamed during sanitization."""

    def __init__(self, field: str, renamed: str) -> None:
        super().__init__(
            f"Property '{field}' renamed to '{renamed}'.",
            {"field": field, "renamed": renamed},
        )


class DatabaseNameWarning(GatewayWarning):
    """The configured database name was altered to be backend-legal."""

    def __init__(self, original: str, database: str) -> None:
        super().__init__(
            f"Database renamed as '{database}'.",
            {"original": original, "database": database},
        )


class DocumentNotFound(GatewayWarning):
    """A lookup by id found no document; the flow continues with a null payload."""

    def __init__(self, document_id: Any, database: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details.update({"document_id": document_id, "database": database})
        super().__init__(
            f"Document '{document_id}' not found in database '{database}'.",
            details,
        )
