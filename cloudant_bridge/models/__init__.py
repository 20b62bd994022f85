"""
Domain models and schemas.

Node configuration contracts, connection profiles, documents and the
outbound result envelope.
"""

from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.models.document import Document
from cloudant_bridge.models.envelope import ResultEnvelope
from cloudant_bridge.models.node_config import (
    EXTERNAL_SERVICE,
    ConnectionNodeConfig,
    InboundNodeConfig,
    OutboundNodeConfig,
)
from cloudant_bridge.models.query import Operation, QueryMode

__all__ = [
    "EXTERNAL_SERVICE",
    "ConnectionNodeConfig",
    "ConnectionProfile",
    "Document",
    "InboundNodeConfig",
    "Operation",
    "OutboundNodeConfig",
    "QueryMode",
    "ResultEnvelope",
]
