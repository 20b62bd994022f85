"""
Connection profile model.

Dependencies: pydantic
System role: Credentials handed to the backend client
"""

from pydantic import BaseModel, ConfigDict, Field


class ConnectionProfile(BaseModel):
    """Resolved account and credentials; immutable for the owning node's lifetime."""

    model_config = ConfigDict(frozen=True)

    account: str = Field(description="Account identifier (host subdomain)")
    username: str = Field(description="Account username or API key")
    password: str = Field(repr=False, description="Account password or API secret")
