"""
Write gateway.

Inserts and deletes documents in the node's database. The database is
created lazily: an insert that finds it missing creates it and tries again,
a bounded number of times.

Dependencies: cloudant_bridge.boundary.cloudant, cloudant_bridge.core
System role: Write path of the outbound gateway node
"""

import logging
from typing import Any, Mapping

from cloudant_bridge.boundary.cloudant.client import CloudantClient, CloudantError
from cloudant_bridge.core.document_sanitizer import extract_document
from cloudant_bridge.core.exceptions import (
    BackendError,
    DatabaseUnavailable,
    MissingDeletePrecondition,
)

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


def _backend_error(e: CloudantError, operation: str, database: str) -> BackendError:
    return BackendError(
        e.description,
        operation=operation,
        status_code=e.status_code,
        details={"database": database, "error": e.error},
    )


class WriteGateway:
    """Document insert and delete against one database."""

    def __init__(
        self,
        client: CloudantClient,
        database: str,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        """
        Initialize write gateway.

        Args:
            client: Connected backend client, shared by all messages of the node
            database: Normalized database name
            max_attempts: Default retry budget for insert
        """
        self.client = client
        self.database = database
        self.max_attempts = max_attempts

    async def ensure_database(self) -> bool:
        """
        Create the database if the account does not list it.

        A 403 on listing means the credentials are an API key without
        account-level rights; the database is then assumed to exist.

        Returns:
            bool: True if the database was created

        Raises:
            BackendError: If listing or creation fails
        """
        try:
            databases = await self.client.list_databases()
        except CloudantError as e:
            if e.status_code == 403:
                logger.info(
                    f"{__name__}:ensure_database - Listing forbidden, assuming database exists",
                    extra={"database": self.database},
                )
                return False
            raise BackendError(
                f"Failed to list databases: {e.description}",
                operation="list_databases",
                status_code=e.status_code,
            ) from e

        if self.database in databases:
            return False

        try:
            await self.client.create_database(self.database)
        except CloudantError as e:
            raise BackendError(
                f"Failed to create database: {e.description}",
                operation="create_database",
                status_code=e.status_code,
                details={"database": self.database},
            ) from e

        logger.info(
            f"{__name__}:ensure_database - Database created",
            extra={"database": self.database},
        )
        return True

    async def insert(
        self,
        document: Mapping[str, Any],
        budget: int | None = None,
    ) -> dict[str, Any]:
        """
        Insert a document, creating the database when it is missing.

        Each "database does not exist" response spends one unit of budget on
        a create-then-retry cycle. No delay is applied between cycles.

        Args:
            document: Sanitized document
            budget: Create-then-retry cycles allowed (max_attempts if None)

        Returns:
            dict: Backend response with the assigned id and rev

        Raises:
            DatabaseUnavailable: If the database is still missing once the budget is spent
            BackendError: On any other backend failure
        """
        remaining = self.max_attempts if budget is None else budget
        cycles = 0
        db = self.client.use(self.database)

        while True:
            try:
                return await db.insert(document)
            except CloudantError as e:
                if not e.is_not_found:
                    raise _backend_error(e, "insert", self.database) from e
                if remaining <= 0:
                    raise DatabaseUnavailable(self.database, cycles) from e

            logger.info(
                f"{__name__}:insert - Database missing, creating it",
                extra={"database": self.database, "remaining": remaining},
            )
            await self._create_quietly()
            remaining -= 1
            cycles += 1

    async def _create_quietly(self) -> None:
        # The retried insert reports the real failure if creation did not help
        try:
            await self.client.create_database(self.database)
        except CloudantError as e:
            logger.warning(
                f"{__name__}:insert - Database creation failed: {e.description}",
                extra={"database": self.database, "status_code": e.status_code},
            )

    async def delete(self, identifier: Any, revision: Any) -> dict[str, Any]:
        """
        Delete one revision of a document.

        Args:
            identifier: Document _id
            revision: Document _rev

        Returns:
            dict: Backend response

        Raises:
            MissingDeletePrecondition: If either value is missing; no backend call is made
            BackendError: If the backend rejects the delete
        """
        if not identifier or not revision:
            raise MissingDeletePrecondition(
                details={"_id": identifier, "_rev": revision, "database": self.database}
            )

        db = self.client.use(self.database)
        try:
            return await db.destroy(str(identifier), str(revision))
        except CloudantError as e:
            raise _backend_error(e, "delete", self.database) from e

    async def delete_from(self, raw: Any) -> dict[str, Any]:
        """
        Delete the document a message points at.

        Args:
            raw: Mapping or JSON text carrying _id and _rev

        Returns:
            dict: Backend response
        """
        document = extract_document(raw, "")
        return await self.delete(document.id, document.revision)
