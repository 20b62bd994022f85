"""
Read gateway.

Three read strategies (lookup by id, indexed search, full listing) whose
backend responses differ in shape. Every strategy ends in the same
ResultEnvelope: documents in `payload`, untouched response in `raw`.

Dependencies: cloudant_bridge.boundary.cloudant, cloudant_bridge.models
System role: Read path of the inbound gateway node
"""

import json
import logging
from typing import Any, Mapping

from cloudant_bridge.boundary.cloudant.client import CloudantClient, CloudantError
from cloudant_bridge.core.exceptions import BackendError, DocumentNotFound
from cloudant_bridge.models.document import DESIGN_PREFIX, Document
from cloudant_bridge.models.envelope import ResultEnvelope
from cloudant_bridge.models.query import QueryMode

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 200

# Keys of a search payload that are request options rather than query terms
SEARCH_OPTIONS: frozenset[str] = frozenset({
    "query",
    "q",
    "bookmark",
    "counts",
    "drilldown",
    "group_field",
    "group_limit",
    "group_sort",
    "highlight_fields",
    "highlight_number",
    "highlight_post_tag",
    "highlight_pre_tag",
    "highlight_size",
    "include_docs",
    "include_fields",
    "limit",
    "ranges",
    "sort",
    "stale",
})


def format_search_query(terms: Any) -> Any:
    """
    Build a search query from a payload.

    A mapping becomes space-joined `field:value` pairs; anything else is
    used as the query itself.

    Args:
        terms: Payload fields or a raw query

    Returns:
        Query string (or the payload unchanged if it is not a mapping)
    """
    if isinstance(terms, Mapping):
        return " ".join(f"{key}:{value}" for key, value in terms.items())
    return terms


def build_search_options(payload: Any, limit: int = DEFAULT_SEARCH_LIMIT) -> dict[str, Any]:
    """
    Turn an inbound payload into search request options.

    Args:
        payload: Mapping of options and/or query terms, or a raw query string
        limit: Row limit applied when the payload sets none

    Returns:
        dict: Options with `query`, `include_docs`, `limit` and a JSON `sort`
    """
    options: dict[str, Any] = {}
    terms: Any = payload
    if isinstance(payload, Mapping):
        terms = {}
        for key, value in payload.items():
            if key in SEARCH_OPTIONS:
                options[key] = value
            else:
                terms[key] = value

    query = options.pop("query", None)
    q = options.pop("q", None)
    options["query"] = query or q or format_search_query(terms)
    options.setdefault("include_docs", True)
    options.setdefault("limit", limit)
    if options.get("sort") is not None:
        options["sort"] = json.dumps(options["sort"])
    return options


def normalize_response(body: Any) -> Any:
    """
    Extract documents from a backend response.

    Row responses become a list of their documents with design documents
    left out, order preserved. Anything else is returned unchanged.

    Args:
        body: Decoded backend response

    Returns:
        list of documents, or the body itself
    """
    if not isinstance(body, Mapping) or "rows" not in body:
        return body

    documents = []
    for row in body["rows"]:
        doc = row["doc"] if "doc" in row else row
        if doc is None:
            continue
        row_id = row.get("id") or Document(doc).id
        if isinstance(row_id, str) and row_id.startswith(DESIGN_PREFIX):
            continue
        documents.append(doc)
    return documents


class ReadGateway:
    """Read strategies against one database."""

    def __init__(
        self,
        client: CloudantClient,
        database: str,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        """
        Initialize read gateway.

        Args:
            client: Connected backend client, shared by all messages of the node
            database: Normalized database name
            search_limit: Default row limit for indexed search
        """
        self.client = client
        self.database = database
        self.search_limit = search_limit

    async def query(
        self,
        mode: QueryMode,
        payload: Any,
        design: str | None = None,
        index: str | None = None,
    ) -> ResultEnvelope:
        """
        Run the read strategy selected by mode.

        Args:
            mode: Read strategy
            payload: Inbound message payload
            design: Design document name (indexed search only)
            index: Search index name (indexed search only)

        Returns:
            ResultEnvelope: Normalized result

        Raises:
            BackendError: On any backend failure other than a missing document
        """
        mode = QueryMode(mode)
        if mode is QueryMode.BY_ID:
            return await self.get_by_id(payload)
        if mode is QueryMode.BY_INDEX:
            return await self.search(payload, design, index)
        return await self.list_all(payload)

    async def get_by_id(self, payload: Any) -> ResultEnvelope:
        """
        Fetch a single document.

        The id is taken from an `id` or `_id` field when the payload is a
        mapping that has one, otherwise the payload is the id.
        """
        doc_id = payload
        if isinstance(payload, Mapping):
            document = Document(payload)
            if document.has_lookup_id:
                doc_id = document.lookup_id

        if doc_id is None or doc_id == "":
            return ResultEnvelope(warning=DocumentNotFound(doc_id, self.database))

        try:
            body = await self.client.use(self.database).get(str(doc_id))
        except CloudantError as e:
            if e.is_missing_document:
                return ResultEnvelope(
                    warning=DocumentNotFound(doc_id, self.database, details=e.to_dict())
                )
            raise self._backend_error(e, "get") from e
        return self._envelope(body)

    async def search(
        self,
        payload: Any,
        design: str | None,
        index: str | None,
    ) -> ResultEnvelope:
        """Query a search index with options built from the payload."""
        options = build_search_options(payload, self.search_limit)
        logger.debug(
            f"{__name__}:search - Searching index",
            extra={"database": self.database, "design": design, "index": index},
        )
        try:
            body = await self.client.use(self.database).search(
                design or "", index or "", options
            )
        except CloudantError as e:
            raise self._backend_error(e, "search") from e
        return self._envelope(body)

    async def list_all(self, payload: Any) -> ResultEnvelope:
        """List every document; a mapping payload supplies extra list options."""
        options = dict(payload) if isinstance(payload, Mapping) else {}
        options.setdefault("include_docs", True)
        try:
            body = await self.client.use(self.database).list(options)
        except CloudantError as e:
            raise self._backend_error(e, "list") from e
        return self._envelope(body)

    def _envelope(self, body: Any) -> ResultEnvelope:
        return ResultEnvelope(payload=normalize_response(body), raw=body)

    def _backend_error(self, e: CloudantError, operation: str) -> BackendError:
        return BackendError(
            e.description,
            operation=operation,
            status_code=e.status_code,
            details={"database": self.database, "error": e.error},
        )
