"""
Connection profile resolution.

A gateway node gets its account and credentials from one of two sources:
a shared connection node registered with the host, or a service bound to
the application by the platform.

Dependencies: cloudant_bridge.configs, cloudant_bridge.models
System role: Startup credential resolution for gateway nodes
"""

import logging
from typing import Protocol
from urllib.parse import urlsplit

from cloudant_bridge.configs.services import BoundServicesSettings
from cloudant_bridge.core.exceptions import ConfigurationError
from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.models.node_config import EXTERNAL_SERVICE, GatewayNodeConfig

logger = logging.getLogger(__name__)


class ProfileLookup(Protocol):
    """Anything that can hand out the profile of a registered connection node."""

    def profile(self, node_id: str) -> ConnectionProfile | None: ...


def host_from_url(value: str) -> str:
    """
    Reduce a URL to its host, leaving bare hosts untouched.

    Args:
        value: Host name or full URL

    Returns:
        str: Network location without credentials
    """
    netloc = urlsplit(value).netloc
    if not netloc:
        return value
    return netloc.rpartition("@")[2]


def account_from_host(host: str) -> str:
    """
    Extract the account name from a backend host.

    `acme.cloudant.com` and `https://acme.cloudant.com/` both give `acme`.
    A host without a dot is returned whole.

    Args:
        host: Host name or URL

    Returns:
        str: Substring before the first dot
    """
    return host_from_url(host).partition(".")[0]


class ConfigResolver:
    """Resolves a node configuration into a ConnectionProfile."""

    def __init__(self, connections: ProfileLookup, services: BoundServicesSettings) -> None:
        """
        Initialize resolver with both credential sources.

        Args:
            connections: Registry of shared connection nodes
            services: Bound services parsed from the platform environment
        """
        self.connections = connections
        self.services = services

    def resolve(self, config: GatewayNodeConfig) -> ConnectionProfile | None:
        """
        Resolve the profile for a node.

        Args:
            config: Gateway node configuration

        Returns:
            ConnectionProfile, or None when neither source yields one
        """
        if config.service == EXTERNAL_SERVICE:
            if not config.connection:
                return None
            return self.connections.profile(config.connection)

        if config.service:
            service = self.services.get_service(config.service)
            if service is None:
                logger.warning(
                    f"{__name__}:resolve - Bound service not found",
                    extra={"node_id": config.id, "service": config.service},
                )
                return None
            credentials = service.credentials
            return ConnectionProfile(
                account=account_from_host(credentials.host),
                username=credentials.username,
                password=credentials.password,
            )

        return None

    def require(self, config: GatewayNodeConfig) -> ConnectionProfile:
        """
        Resolve the profile for a node or fail.

        Args:
            config: Gateway node configuration

        Returns:
            ConnectionProfile: Resolved profile

        Raises:
            ConfigurationError: If no profile can be resolved
        """
        profile = self.resolve(config)
        if profile is None:
            raise ConfigurationError(
                "No Cloudant connection configured",
                node_id=config.id,
                details={"service": config.service, "connection": config.connection},
            )
        return profile
