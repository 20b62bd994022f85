"""
Gateway node base.

Owns the node's single backend client for its lifetime. Each received
message runs as its own task; tasks of the same node are not ordered with
respect to each other and share nothing mutable but the read-only client.

Dependencies: asyncio, cloudant_bridge.boundary, cloudant_bridge.core
System role: Message boundary between the flow host and the gateways
"""

import asyncio
import logging
from typing import Any, Callable

from cloudant_bridge.boundary.cloudant.client import CloudantClient, CloudantError
from cloudant_bridge.boundary.flow.channel import NodeChannel
from cloudant_bridge.configs.cloudant import CloudantSettings
from cloudant_bridge.core.config_resolver import ConfigResolver
from cloudant_bridge.core.exceptions import CloudantBridgeException, ConfigurationError
from cloudant_bridge.core.name_normalizer import clean_database_name
from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.models.node_config import GatewayNodeConfig
from cloudant_bridge.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionProfile, CloudantSettings], CloudantClient]


class GatewayNode:
    """Shared lifecycle of the inbound and outbound gateway nodes."""

    def __init__(
        self,
        config: GatewayNodeConfig,
        channel: NodeChannel,
        resolver: ConfigResolver,
        settings: CloudantSettings | None = None,
        client_factory: ClientFactory = CloudantClient,
    ) -> None:
        """
        Initialize node: normalize the database name and resolve credentials.

        Both problems are reported through the channel; a node without a
        profile never connects and ignores its input.

        Args:
            config: Node configuration
            channel: Host reporting channel for this node
            resolver: Connection profile resolver
            settings: Backend settings (loaded from env if None)
            client_factory: Builds the backend client from a profile
        """
        self.config = config
        self.channel = channel
        self.settings = settings or CloudantSettings()
        self._client_factory = client_factory
        self.client: CloudantClient | None = None
        self._tasks: set[asyncio.Task] = set()

        self.database, warning = clean_database_name(config.database)
        if warning is not None:
            channel.warn(warning.message, warning)

        self.profile: ConnectionProfile | None = None
        try:
            self.profile = resolver.require(config)
        except ConfigurationError as e:
            channel.error(e.message, e)

    @property
    def ready(self) -> bool:
        return self.client is not None

    async def start(self) -> bool:
        """
        Connect to the backend.

        Returns:
            bool: True if the node accepts input
        """
        if self.profile is None:
            return False

        client = self._client_factory(self.profile, self.settings)
        try:
            await client.connect()
        except CloudantError as e:
            self.channel.error(e.description, e)
            return False

        self.client = client
        await self.on_connected(client)
        return True

    async def on_connected(self, client: CloudantClient) -> None:
        """Hook run once after connecting."""

    def receive(self, msg: dict[str, Any]) -> asyncio.Task | None:
        """
        Schedule processing of a message without waiting for it.

        Args:
            msg: Inbound flow message

        Returns:
            asyncio.Task, or None when the node is not connected
        """
        if not self.ready:
            logger.debug(
                f"{__name__}:receive - Node not connected, message ignored",
                extra={"node_id": self.config.id},
            )
            return None
        task = asyncio.create_task(self.on_input(msg))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def on_input(self, msg: dict[str, Any]) -> None:
        """
        Process one message; failures are reported, never raised.

        Args:
            msg: Inbound flow message
        """
        if not self.ready:
            return
        try:
            await self.handle(msg)
        except CloudantBridgeException as e:
            self.channel.error(e.message, e)
        except Exception as e:  # pylint: disable=broad-except
            log_exception_with_context(
                logger,
                f"{__name__}:on_input - Unexpected failure",
                e,
                node_id=self.config.id,
                msgid=msg.get("_msgid"),
            )
            self.channel.error(str(e), e)

    async def handle(self, msg: dict[str, Any]) -> None:
        """
        Run the node's operation for one message.

        Subclasses must override this. Exceptions raised here are reported
        by on_input.

        Args:
            msg: Inbound flow message
        """
        raise NotImplementedError(f"{type(self).__name__} must implement handle()")

    async def close(self) -> None:
        """Wait for in-flight messages, then release the client."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self.client is not None:
            await self.client.close()
            self.client = None
