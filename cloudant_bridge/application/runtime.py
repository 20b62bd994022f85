"""
Bridge runtime.

Builds nodes from flow definitions the way the flow host registers node
types: `cloudant` (shared connection), `cloudant out` and `cloudant in`.
Wires every gateway node to the shared registry, credential store and
bound services.

Dependencies: cloudant_bridge.application.nodes, cloudant_bridge.configs
System role: Composition root for embedding the bridge in a host
"""

import logging
from typing import Any, Callable

from cloudant_bridge.application.nodes.base import GatewayNode
from cloudant_bridge.application.nodes.connection_node import CloudantConnectionNode
from cloudant_bridge.application.nodes.inbound_node import CloudantInNode
from cloudant_bridge.application.nodes.outbound_node import CloudantOutNode
from cloudant_bridge.boundary.flow.channel import LoggingChannel, NodeChannel
from cloudant_bridge.boundary.flow.credentials import CredentialStore, InMemoryCredentialStore
from cloudant_bridge.boundary.flow.registry import ConnectionRegistry
from cloudant_bridge.configs import Settings, get_settings
from cloudant_bridge.core.config_resolver import ConfigResolver
from cloudant_bridge.models.node_config import (
    ConnectionNodeConfig,
    InboundNodeConfig,
    OutboundNodeConfig,
)
from cloudant_bridge.observability.logger import configure_logging

logger = logging.getLogger(__name__)

CONNECTION_NODE = "cloudant"
OUTBOUND_NODE = "cloudant out"
INBOUND_NODE = "cloudant in"

PACKAGE_LOGGER = "cloudant_bridge"

ChannelFactory = Callable[[dict[str, Any]], NodeChannel]


def _default_channel(definition: dict[str, Any]) -> NodeChannel:
    return LoggingChannel(definition.get("name") or definition["id"])


class BridgeRuntime:
    """Creates and tracks the nodes of one flow."""

    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialStore | None = None,
        channel_factory: ChannelFactory = _default_channel,
    ) -> None:
        """
        Initialize runtime.

        Args:
            settings: Bridge settings (cached env settings if None)
            credentials: Host credential store (empty in-memory store if None)
            channel_factory: Builds the reporting channel for a node definition
        """
        self.settings = settings or get_settings()
        if self.settings.log_to_stdout:
            configure_logging(self.settings.log_level)
        logging.getLogger(PACKAGE_LOGGER).setLevel(self.settings.log_level)
        self.credentials = credentials or InMemoryCredentialStore()
        self.registry = ConnectionRegistry()
        self.resolver = ConfigResolver(self.registry, self.settings.services)
        self._channel_factory = channel_factory
        self.nodes: dict[str, GatewayNode] = {}

    def create_node(self, definition: dict[str, Any]) -> CloudantConnectionNode | GatewayNode:
        """
        Create a node from its flow definition.

        Connection nodes must be created before the gateway nodes using them.

        Args:
            definition: Node properties including `id` and `type`

        Returns:
            The created node

        Raises:
            ValueError: If the node type is not a Cloudant node
            pydantic.ValidationError: If the definition is invalid
        """
        node_type = definition.get("type")
        if node_type == CONNECTION_NODE:
            node = CloudantConnectionNode(
                ConnectionNodeConfig.model_validate(definition), self.credentials
            )
            self.registry.register(node)
            return node

        if node_type == OUTBOUND_NODE:
            gateway: GatewayNode = CloudantOutNode(
                OutboundNodeConfig.model_validate(definition),
                self._channel_factory(definition),
                self.resolver,
                settings=self.settings.cloudant,
            )
        elif node_type == INBOUND_NODE:
            gateway = CloudantInNode(
                InboundNodeConfig.model_validate(definition),
                self._channel_factory(definition),
                self.resolver,
                settings=self.settings.cloudant,
            )
        else:
            raise ValueError(f"Unsupported node type: {node_type!r}")

        self.nodes[gateway.config.id] = gateway
        logger.info(
            f"{__name__}:create_node - Node created",
            extra={"node_id": gateway.config.id, "node_type": node_type},
        )
        return gateway

    async def start(self) -> None:
        for node in self.nodes.values():
            await node.start()

    async def close(self) -> None:
        for node in self.nodes.values():
            await node.close()
        self.nodes.clear()
