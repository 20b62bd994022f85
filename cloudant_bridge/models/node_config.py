"""
Node configuration schemas.

Mirror the property sets the flow editor stores for each node type, so a
node definition can be validated straight from the exported flow JSON.

Dependencies: pydantic
System role: Static configuration contracts for gateway nodes
"""

from pydantic import BaseModel, ConfigDict, Field

from cloudant_bridge.models.query import Operation, QueryMode

# `service` value selecting a shared connection node instead of a bound service
EXTERNAL_SERVICE = "_ext_"


class ConnectionNodeConfig(BaseModel):
    """Shared connection node; credentials live in the host's credential store."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    host: str = Field(description="Account host or URL, e.g. acme.cloudant.com")


class GatewayNodeConfig(BaseModel):
    """Properties common to the inbound and outbound gateway nodes."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    service: str = Field(
        default="",
        description=f"Bound service name, or '{EXTERNAL_SERVICE}' for a shared connection node",
    )
    connection: str | None = Field(
        default=None,
        alias="cloudant",
        description="Id of the shared connection node",
    )
    database: str = Field(description="Target database name, normalized at startup")


class OutboundNodeConfig(GatewayNodeConfig):
    """Writes documents."""

    operation: Operation = Operation.INSERT
    payonly: bool = Field(
        default=False,
        description="Store only msg.payload instead of the whole message",
    )


class InboundNodeConfig(GatewayNodeConfig):
    """Reads documents."""

    search: QueryMode = QueryMode.BY_ID
    design: str | None = Field(default=None, description="Design document for indexed search")
    index: str | None = Field(default=None, description="Search index name")
