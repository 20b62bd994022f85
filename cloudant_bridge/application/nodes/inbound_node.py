"""
Inbound gateway node.

Reads documents with the configured strategy and emits the received
message with the result as its payload.

Dependencies: cloudant_bridge.application.services
System role: Flow message -> document read -> flow message
"""

from typing import Any

from cloudant_bridge.application.nodes.base import GatewayNode
from cloudant_bridge.application.services.read_gateway import ReadGateway
from cloudant_bridge.boundary.cloudant.client import CloudantClient
from cloudant_bridge.models.node_config import InboundNodeConfig


class CloudantInNode(GatewayNode):
    """Queries the database for each flow message."""

    config: InboundNodeConfig

    reader: ReadGateway | None = None

    async def on_connected(self, client: CloudantClient) -> None:
        self.reader = ReadGateway(
            client,
            self.database,
            search_limit=self.settings.search_limit,
        )

    async def handle(self, msg: dict[str, Any]) -> None:
        # BackendError propagates to on_input: reported, nothing emitted
        envelope = await self.reader.query(
            self.config.search,
            msg.get("payload"),
            design=self.config.design,
            index=self.config.index,
        )
        if envelope.warning is not None:
            self.channel.warn(envelope.warning.message, envelope.warning)
        self.channel.send(envelope.apply_to(msg))
