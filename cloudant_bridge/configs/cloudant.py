"""
Cloudant backend configuration settings.

Controls how a resolved account is turned into a base URL, the transport
timeout, and the defaults used by the write and read gateways.

Dependencies: pydantic, pydantic_settings
System role: Backend client and gateway configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cloudant_bridge.configs.base import BaseSettings


class CloudantSettings(BaseSettings):
    """Cloudant/CouchDB client configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLOUDANT_",
        case_sensitive=False,
        extra="ignore",
    )

    url_template: str = Field(
        default="https://{account}.cloudant.com",
        description="Base URL template, formatted with the resolved account",
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    max_insert_attempts: int = Field(
        default=3,
        ge=0,
        description="Create-database-then-retry cycles allowed per insert",
    )
    search_limit: int = Field(
        default=200,
        gt=0,
        description="Default row limit for indexed search",
    )

    def base_url(self, account: str) -> str:
        """
        Build the backend base URL for an account.

        Args:
            account: Account identifier (host subdomain)

        Returns:
            str: Base URL without trailing slash
        """
        return self.url_template.format(account=account).rstrip("/")
