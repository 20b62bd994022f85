"""
Seams to the flow host: per-node reporting channel, credential storage and
the registry of shared connection nodes.
"""

from cloudant_bridge.boundary.flow.channel import LoggingChannel, NodeChannel
from cloudant_bridge.boundary.flow.credentials import (
    CredentialStore,
    InMemoryCredentialStore,
    NodeCredentials,
)
from cloudant_bridge.boundary.flow.registry import ConnectionRegistry

__all__ = [
    "ConnectionRegistry",
    "CredentialStore",
    "InMemoryCredentialStore",
    "LoggingChannel",
    "NodeChannel",
    "NodeCredentials",
]
