"""
Document model.

A document is an ordered mapping of field name to value. The backend gives
special meaning to fields starting with an underscore; only a fixed set of
those may be written by clients.

Dependencies: None
System role: Typed access to backend-special document fields
"""

from typing import Any

RESERVED_PREFIX = "_"
ID_FIELD = "_id"
REV_FIELD = "_rev"
DESIGN_PREFIX = "_design/"

# https://docs.couchdb.org/en/stable/api/document/common.html#special-fields
RESERVED_FIELDS: frozenset[str] = frozenset({
    "_id",
    "_rev",
    "_attachments",
    "_deleted",
    "_revisions",
    "_revs_info",
    "_conflicts",
    "_deleted_conflicts",
    "_local_seq",
})


def is_field_name_valid(name: str) -> bool:
    """Return True when the field may be stored as-is."""
    return not name.startswith(RESERVED_PREFIX) or name in RESERVED_FIELDS


class Document(dict[str, Any]):
    """Mapping with typed accessors for the backend-special fields."""

    @property
    def id(self) -> Any:
        return self.get(ID_FIELD)

    @property
    def revision(self) -> Any:
        return self.get(REV_FIELD)

    @property
    def lookup_id(self) -> Any:
        """Identifier to fetch by: a plain `id` field wins over `_id`."""
        return self.get("id") or self.get(ID_FIELD)

    @property
    def has_lookup_id(self) -> bool:
        return "id" in self or ID_FIELD in self
