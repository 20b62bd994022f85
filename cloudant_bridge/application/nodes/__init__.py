"""
Flow nodes: the shared connection node and the two gateway nodes.
"""

from cloudant_bridge.application.nodes.base import GatewayNode
from cloudant_bridge.application.nodes.connection_node import CloudantConnectionNode
from cloudant_bridge.application.nodes.inbound_node import CloudantInNode
from cloudant_bridge.application.nodes.outbound_node import CloudantOutNode

__all__ = [
    "CloudantConnectionNode",
    "CloudantInNode",
    "CloudantOutNode",
    "GatewayNode",
]
