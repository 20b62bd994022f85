"""
Inbound message sanitization.

Messages reach the gateway as mappings, scalars or serialized text. Each
shape has its own conversion into a Document; the document's top-level
field names are then checked against the backend's reserved prefix.

Dependencies: json (stdlib)
System role: Builds well-formed documents from arbitrary flow messages
"""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from cloudant_bridge.core.exceptions import ConflictingFieldName, FieldRenameWarning
from cloudant_bridge.models.document import RESERVED_PREFIX, Document, is_field_name_valid


@dataclass(frozen=True)
class StructuredInput:
    """Already a mapping; keys are stored as strings."""

    value: Mapping[Any, Any]

    def to_document(self, fallback_field: str) -> Document:
        return Document({str(key): value for key, value in self.value.items()})


@dataclass(frozen=True)
class ScalarInput:
    """A non-mapping, non-text value (number, bool, list, None...)."""

    value: Any

    def to_document(self, fallback_field: str) -> Document:
        return Document({fallback_field: self.value})


@dataclass(frozen=True)
class TextInput:
    """A string that may hold a serialized JSON object."""

    value: str

    def to_document(self, fallback_field: str) -> Document:
        try:
            parsed = json.loads(self.value)
        except ValueError:
            return Document({fallback_field: self.value})
        if isinstance(parsed, dict):
            return Document(parsed)
        return Document({fallback_field: self.value})


RawInput = Union[StructuredInput, ScalarInput, TextInput]


def classify(raw: Any) -> RawInput:
    """
    Tag an inbound value with its input shape.

    Args:
        raw: Message or payload as received

    Returns:
        RawInput: StructuredInput, TextInput or ScalarInput
    """
    if isinstance(raw, Mapping):
        return StructuredInput(raw)
    if isinstance(raw, (str, bytes, bytearray)):
        text = raw if isinstance(raw, str) else bytes(raw).decode("utf-8", errors="replace")
        return TextInput(text)
    return ScalarInput(raw)


def extract_document(raw: Any, fallback_field: str) -> Document:
    """
    Coerce any inbound value into a Document without renaming fields.

    Args:
        raw: Message or payload as received
        fallback_field: Field name used when the value is not a mapping

    Returns:
        Document: New document; the input is never mutated
    """
    return classify(raw).to_document(fallback_field)


@dataclass
class SanitizedDocument:
    """A storable document plus the renames made to get there."""

    document: Document
    warnings: list[FieldRenameWarning] = field(default_factory=list)


def clean_document(document: Document) -> SanitizedDocument:
    """
    Strip the reserved prefix from field names the backend would reject.

    The prefix is removed until the name is legal, so `__x` becomes `x` while
    `__id` becomes the reserved `_id`. Renamed fields keep their position.

    Args:
        document: Document to clean

    Returns:
        SanitizedDocument: Cleaned copy and one warning per rename

    Raises:
        ConflictingFieldName: If a stripped name is already a field
    """
    cleaned = Document()
    warnings: list[FieldRenameWarning] = []
    for name, value in document.items():
        if is_field_name_valid(name):
            cleaned[name] = value
            continue
        new_name = name
        while not is_field_name_valid(new_name):
            new_name = new_name[len(RESERVED_PREFIX):]
        if new_name in document or new_name in cleaned:
            raise ConflictingFieldName(name, new_name)
        cleaned[new_name] = value
        warnings.append(FieldRenameWarning(name, new_name))
    return SanitizedDocument(cleaned, warnings)


def sanitize(raw: Any, fallback_field: str) -> SanitizedDocument:
    """
    Build a storable document from an inbound value.

    Args:
        raw: Message or payload as received
        fallback_field: Field name used when the value is not a mapping

    Returns:
        SanitizedDocument: Document and rename warnings

    Raises:
        ConflictingFieldName: If a stripped name is already a field
    """
    return clean_document(extract_document(raw, fallback_field))
