"""
Cloudant/CouchDB HTTP client.

Thin async wrapper over the database REST API. Every call returns the
decoded JSON body or raises CloudantError carrying the HTTP status code and
the backend's description, so callers can tell "not found" from the rest.

Dependencies: httpx, cloudant_bridge.configs, cloudant_bridge.models
System role: Sole I/O path between the gateways and the backend
"""

import json
import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from cloudant_bridge.configs.cloudant import CloudantSettings
from cloudant_bridge.models.connection import ConnectionProfile
from cloudant_bridge.models.document import DESIGN_PREFIX

logger = logging.getLogger(__name__)

# View and _all_docs parameters whose values must be sent as JSON
_JSON_PARAMS: frozenset[str] = frozenset({
    "key",
    "keys",
    "startkey",
    "start_key",
    "endkey",
    "end_key",
    "startkey_docid",
    "endkey_docid",
})


class CloudantError(Exception):
    """Failed backend call."""

    def __init__(
        self,
        status_code: int | None,
        error: str | None = None,
        reason: str | None = None,
    ) -> None:
        """
        Initialize backend error.

        Args:
            status_code: HTTP status, None when the request never completed
            error: Backend error token (e.g. "not_found")
            reason: Backend explanation (e.g. "missing")
        """
        self.status_code = status_code
        self.error = error
        self.reason = reason
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return self.reason or self.error or "unknown error"

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_missing_document(self) -> bool:
        """404 caused by the document rather than the database."""
        return self.is_not_found and self.reason in ("missing", "deleted")

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "error": self.error,
            "reason": self.reason,
        }

    @classmethod
    def from_response(cls, response: httpx.Response) -> "CloudantError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            response.status_code,
            error=body.get("error") or response.reason_phrase,
            reason=body.get("reason"),
        )


def encode_params(options: Mapping[str, Any]) -> dict[str, str]:
    """
    Encode query options for the query string.

    Args:
        options: Option name to value

    Returns:
        dict[str, str]: Query parameters
    """
    params: dict[str, str] = {}
    for name, value in options.items():
        if value is None:
            continue
        if name in _JSON_PARAMS:
            params[name] = json.dumps(value)
        elif isinstance(value, bool):
            params[name] = "true" if value else "false"
        elif isinstance(value, (dict, list)):
            params[name] = json.dumps(value)
        else:
            params[name] = str(value)
    return params


def _path(*segments: str) -> str:
    return "/" + "/".join(quote(segment, safe="") for segment in segments)


class CloudantClient:
    """Authenticated connection to one Cloudant account."""

    def __init__(
        self,
        profile: ConnectionProfile,
        settings: CloudantSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client (no I/O until connect()).

        Args:
            profile: Account and credentials
            settings: Backend settings (loaded from env if None)
            transport: Optional httpx transport, used by tests
        """
        self.profile = profile
        self.settings = settings or CloudantSettings()
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self.settings.base_url(self.profile.account)

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("CloudantClient is not connected; call connect() first")
        return self._http

    async def connect(self) -> dict[str, Any]:
        """
        Open the HTTP client and verify the credentials.

        Returns:
            dict: Session info reported by the backend

        Raises:
            CloudantError: If the account is unreachable or rejects the credentials
        """
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.profile.username, self.profile.password),
            timeout=httpx.Timeout(self.settings.timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        try:
            session = await self.request("GET", "/_session")
        except CloudantError:
            await self.close()
            raise
        logger.info(
            f"{__name__}:connect - Connected",
            extra={"account": self.profile.account},
        )
        return session

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """
        Issue one backend call.

        Args:
            method: HTTP method
            path: Path below the account base URL
            params: Query options, encoded with encode_params
            body: JSON body

        Returns:
            Decoded JSON response body

        Raises:
            CloudantError: On any non-2xx or non-JSON response, or a transport failure
        """
        try:
            response = await self.http.request(
                method,
                path,
                params=encode_params(params) if params else None,
                json=body,
            )
        except httpx.HTTPError as e:
            raise CloudantError(None, error=type(e).__name__, reason=str(e) or None) from e

        if response.is_error:
            raise CloudantError.from_response(response)
        try:
            return response.json()
        except ValueError as e:
            content_type = response.headers.get("content-type", "unknown")
            raise CloudantError(
                response.status_code,
                error="bad_response",
                reason=f"Expected a JSON body, got {content_type}",
            ) from e

    async def list_databases(self) -> list[str]:
        return await self.request("GET", "/_all_dbs")

    async def create_database(self, name: str) -> dict[str, Any]:
        """
        Create a database; an existing one counts as success.

        Args:
            name: Database name

        Returns:
            dict: Backend response body
        """
        try:
            return await self.request("PUT", _path(name))
        except CloudantError as e:
            if e.status_code == 412:
                logger.debug(
                    f"{__name__}:create_database - Database already exists",
                    extra={"database": name},
                )
                return {"ok": True}
            raise

    def use(self, name: str) -> "CloudantDatabase":
        return CloudantDatabase(self, name)


class CloudantDatabase:
    """Document operations scoped to one database."""

    def __init__(self, client: CloudantClient, name: str) -> None:
        self.client = client
        self.name = name

    async def insert(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Store a document; the backend assigns _id when absent. Returns {ok, id, rev}."""
        return await self.client.request("POST", _path(self.name), body=dict(document))

    async def destroy(self, doc_id: str, rev: str) -> dict[str, Any]:
        return await self.client.request(
            "DELETE", _path(self.name, doc_id), params={"rev": rev}
        )

    async def get(self, doc_id: str) -> dict[str, Any]:
        return await self.client.request("GET", self._doc_path(doc_id))

    async def search(
        self,
        design: str,
        index: str,
        options: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Query a search index. `sort` must already be a JSON string."""
        return await self.client.request(
            "GET",
            _path(self.name, "_design", design, "_search", index),
            params=options,
        )

    async def list(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.client.request(
            "GET", _path(self.name, "_all_docs"), params=options or {}
        )

    def _doc_path(self, doc_id: str) -> str:
        # Design document ids keep their slash
        if doc_id.startswith(DESIGN_PREFIX):
            return _path(self.name, "_design", doc_id[len(DESIGN_PREFIX):])
        return _path(self.name, doc_id)
