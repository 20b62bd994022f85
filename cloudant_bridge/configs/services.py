"""
Bound service configuration.

Parses the platform's bound-service descriptor variable (VCAP_SERVICES) into
typed descriptors and offers lookup by service name.

Dependencies: pydantic, pydantic_settings
System role: Credential source for bound-service connection profiles
"""

import re

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import SettingsConfigDict

from cloudant_bridge.configs.base import BaseSettings

_CLOUDANT_LABEL = re.compile(r"^cloudant", re.IGNORECASE)


class ServiceCredentials(BaseModel):
    """Credentials block of a bound service descriptor."""

    model_config = ConfigDict(extra="ignore")

    host: str
    username: str
    password: str = Field(repr=False)
    url: str | None = Field(default=None, repr=False)


class ServiceDescriptor(BaseModel):
    """A single bound service instance."""

    model_config = ConfigDict(extra="ignore")

    name: str
    label: str = ""
    credentials: ServiceCredentials


class BoundServicesSettings(BaseSettings):
    """Services bound to the running application, grouped by label."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    vcap_services: dict[str, list[ServiceDescriptor]] = Field(
        default_factory=dict,
        description="JSON object mapping service label to bound instances",
    )

    def get_service(self, name: str) -> ServiceDescriptor | None:
        """
        Find a bound service by instance name.

        Args:
            name: Service instance name

        Returns:
            ServiceDescriptor if bound, None otherwise
        """
        for instances in self.vcap_services.values():
            for service in instances:
                if service.name == name:
                    return service
        return None

    def cloudant_services(self) -> list[dict[str, str]]:
        """
        List the Cloudant services bound to the application.

        Returns:
            list[dict[str, str]]: One {"name", "label"} entry per instance
        """
        return [
            {"name": service.name, "label": service.label}
            for label, instances in self.vcap_services.items()
            if _CLOUDANT_LABEL.match(label)
            for service in instances
        ]
