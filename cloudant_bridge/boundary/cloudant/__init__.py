"""
Async Cloudant/CouchDB client.
"""

from cloudant_bridge.boundary.cloudant.client import (
    CloudantClient,
    CloudantDatabase,
    CloudantError,
)

__all__ = ["CloudantClient", "CloudantDatabase", "CloudantError"]
