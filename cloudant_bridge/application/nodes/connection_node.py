"""
Shared connection node.

Holds an account host and, through the host's credential store, the
username and password that gateway nodes configured with an external
connection will use.

Dependencies: cloudant_bridge.boundary.flow, cloudant_bridge.core
System role: Credential source A for gateway nodes
"""

from cloudant_bridge.boundary.flow.credentials import CredentialStore
from cloudant_bridge.core.config_resolver import account_from_host, host_from_url
from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.models.node_config import ConnectionNodeConfig


class CloudantConnectionNode:
    """Configuration node shared by any number of gateway nodes."""

    def __init__(self, config: ConnectionNodeConfig, credentials: CredentialStore) -> None:
        """
        Initialize connection node.

        Args:
            config: Node configuration (id, name, host)
            credentials: Host credential store, keyed by node id
        """
        self.id = config.id
        self.name = config.name
        self.host = host_from_url(config.host)
        self.account = account_from_host(self.host)

        stored = credentials.get_credentials(config.id)
        self.username = stored.username if stored else None
        self._password = stored.password if stored else None

    @property
    def profile(self) -> ConnectionProfile | None:
        """Profile for this account, None until credentials are stored."""
        if not self.username or self._password is None:
            return None
        return ConnectionProfile(
            account=self.account,
            username=self.username,
            password=self._password,
        )
