"""
Unified application settings.

Aggregates all configuration modules into a single Settings class and holds
the process-wide logging options.

Dependencies: All config modules
System role: Central configuration aggregator for the bridge
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator

from cloudant_bridge.configs.base import BaseSettings
from cloudant_bridge.configs.cloudant import CloudantSettings
from cloudant_bridge.configs.services import BoundServicesSettings


class Settings(BaseSettings):
    """Unified settings aggregating all config modules."""

    log_level: str = Field(
        default="INFO",
        description="Level of the cloudant_bridge loggers (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_to_stdout: bool = Field(
        default=False,
        description="Replace root log handlers with the bridge's stdout handler on startup",
    )
    cloudant: CloudantSettings = Field(default_factory=CloudantSettings)
    services: BoundServicesSettings = Field(default_factory=BoundServicesSettings)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Environment variables are read once, on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from cloudant_bridge.configs import get_settings
        settings = get_settings()
        limit = settings.cloudant.search_limit
    """
    return Settings()
