"""
Outbound gateway node.

Stores every received message as a document, or deletes the document the
message names, depending on the configured operation.

Dependencies: cloudant_bridge.application.services, cloudant_bridge.core
System role: Flow message -> document write
"""

import logging
from typing import Any

from cloudant_bridge.application.nodes.base import GatewayNode
from cloudant_bridge.application.services.write_gateway import WriteGateway
from cloudant_bridge.boundary.cloudant.client import CloudantClient
from cloudant_bridge.core.document_sanitizer import sanitize
from cloudant_bridge.core.exceptions import BackendError, CloudantBridgeException
from cloudant_bridge.models.node_config import OutboundNodeConfig
from cloudant_bridge.models.query import Operation

logger = logging.getLogger(__name__)


class CloudantOutNode(GatewayNode):
    """Writes flow messages to the database."""

    config: OutboundNodeConfig

    writer: WriteGateway | None = None

    async def on_connected(self, client: CloudantClient) -> None:
        self.writer = WriteGateway(
            client,
            self.database,
            max_attempts=self.settings.max_insert_attempts,
        )
        try:
            await self.writer.ensure_database()
        except BackendError as e:
            self.channel.error(e.message, e)

    async def handle(self, msg: dict[str, Any]) -> None:
        if self.config.operation is Operation.INSERT:
            await self._insert(msg)
        else:
            await self._delete(msg)

    async def _insert(self, msg: dict[str, Any]) -> None:
        if self.config.payonly:
            raw, root = msg.get("payload"), "payload"
        else:
            raw, root = msg, "msg"

        try:
            result = sanitize(raw, root)
            for warning in result.warnings:
                self.channel.warn(warning.message, warning)
            response = await self.writer.insert(result.document)
        except CloudantBridgeException as e:
            self.channel.error(f"Failed to insert document: {e.message}", e)
            return

        logger.info(
            f"{__name__}:insert - Document inserted",
            extra={
                "node_id": self.config.id,
                "database": self.database,
                "doc_id": response.get("id"),
                "rev": response.get("rev"),
            },
        )

    async def _delete(self, msg: dict[str, Any]) -> None:
        try:
            response = await self.writer.delete_from(msg.get("payload") or msg)
        except BackendError as e:
            self.channel.error(f"Failed to delete document: {e.message}", e)
            return

        logger.info(
            f"{__name__}:delete - Document deleted",
            extra={
                "node_id": self.config.id,
                "database": self.database,
                "doc_id": response.get("id"),
            },
        )
