"""
Node credential storage.

The host stores credentials apart from the flow definition, keyed by node
id. Only the lookup side is needed by the bridge.

Dependencies: pydantic
System role: Credential source for shared connection nodes
"""

from typing import Protocol

from pydantic import BaseModel, Field


class NodeCredentials(BaseModel):
    """Credentials attached to a connection node."""

    username: str | None = None
    password: str | None = Field(default=None, repr=False)


class CredentialStore(Protocol):
    def get_credentials(self, node_id: str) -> NodeCredentials | None: ...


class InMemoryCredentialStore:
    """Dict-backed CredentialStore for embedding and tests."""

    def __init__(self, credentials: dict[str, NodeCredentials] | None = None) -> None:
        self._credentials: dict[str, NodeCredentials] = dict(credentials or {})

    def add_credentials(self, node_id: str, credentials: NodeCredentials) -> None:
        self._credentials[node_id] = credentials

    def get_credentials(self, node_id: str) -> NodeCredentials | None:
        return self._credentials.get(node_id)

    def delete_credentials(self, node_id: str) -> None:
        self._credentials.pop(node_id, None)
