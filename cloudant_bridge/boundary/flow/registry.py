"""
Registry of shared connection nodes.

Gateway nodes configured with an external connection look it up here by
node id at startup.

Dependencies: cloudant_bridge.models
System role: Credential source for externally configured gateway nodes
"""

import logging
from typing import Protocol

from cloudant_bridge.models.connection import ConnectionProfile

logger = logging.getLogger(__name__)


class ConnectionNode(Protocol):
    id: str

    @property
    def profile(self) -> ConnectionProfile | None: ...


class ConnectionRegistry:
    """Connection nodes by id."""

    def __init__(self) -> None:
        self._nodes: dict[str, ConnectionNode] = {}

    def register(self, node: ConnectionNode) -> None:
        self._nodes[node.id] = node
        logger.debug(
            f"{__name__}:register - Connection node registered",
            extra={"node_id": node.id},
        )

    def unregister(self, node_id: str) -> None:
        self._nodes.pop(node_id, None)

    def get(self, node_id: str) -> ConnectionNode | None:
        return self._nodes.get(node_id)

    def profile(self, node_id: str) -> ConnectionProfile | None:
        """
        Profile of a registered connection node.

        Args:
            node_id: Connection node id

        Returns:
            ConnectionProfile, or None if the node is unknown or lacks credentials
        """
        node = self._nodes.get(node_id)
        if node is None:
            return None
        return node.profile
