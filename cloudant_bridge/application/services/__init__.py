"""
Gateway services.
"""

from cloudant_bridge.application.services.read_gateway import ReadGateway
from cloudant_bridge.application.services.write_gateway import WriteGateway

__all__ = ["ReadGateway", "WriteGateway"]
