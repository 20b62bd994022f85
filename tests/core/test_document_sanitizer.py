"""
Test suite for inbound message sanitization.

Tests input classification, per-shape conversion to documents and
reserved-prefix field renaming.

System role: Verification of DocumentSanitizer
"""

import pytest

from cloudant_bridge.core.document_sanitizer import (
    ScalarInput,
    StructuredInput,
    TextInput,
    classify,
    clean_document,
    extract_document,
    sanitize,
)
from cloudant_bridge.core.exceptions import ConflictingFieldName, FieldRenameWarning
from cloudant_bridge.models.document import RESERVED_FIELDS, Document


class TestClassify:
    """Test suite for classify()."""

    def test_mapping_is_structured(self) -> None:
        assert isinstance(classify({"a": 1}), StructuredInput)

    def test_string_is_text(self) -> None:
        assert isinstance(classify('{"a": 1}'), TextInput)

    def test_bytes_are_text(self) -> None:
        raw = classify(b'{"a": 1}')
        assert isinstance(raw, TextInput)
        assert raw.value == '{"a": 1}'

    @pytest.mark.parametrize("value", [42, 1.5, True, None, [1, 2]])
    def test_other_values_are_scalar(self, value) -> None:
        assert isinstance(classify(value), ScalarInput)


class TestExtractDocument:
    """Test suite for extract_document()."""

    def test_mapping_is_copied(self) -> None:
        raw = {"a": 1}
        document = extract_document(raw, "payload")

        assert document == {"a": 1}
        assert isinstance(document, Document)
        assert document is not raw

    def test_json_object_text_is_parsed(self) -> None:
        assert extract_document('{"name": "widget", "qty": 2}', "payload") == {
            "name": "widget",
            "qty": 2,
        }

    def test_json_scalar_text_is_wrapped(self) -> None:
        assert extract_document("5", "payload") == {"payload": "5"}

    def test_json_array_text_is_wrapped(self) -> None:
        assert extract_document("[1, 2]", "payload") == {"payload": "[1, 2]"}

    def test_plain_text_is_wrapped(self) -> None:
        assert extract_document("hello world", "msg") == {"msg": "hello world"}

    def test_number_is_wrapped(self) -> None:
        assert extract_document(42, "payload") == {"payload": 42}

    def test_none_is_wrapped(self) -> None:
        assert extract_document(None, "payload") == {"payload": None}

    def test_prefixed_fields_are_kept(self) -> None:
        assert extract_document({"_secret": "x"}, "") == {"_secret": "x"}

    def test_non_string_keys_become_strings(self) -> None:
        assert extract_document({1: "a", None: "b"}, "payload") == {"1": "a", "None": "b"}


class TestSanitize:
    """Test suite for sanitize() and clean_document()."""

    def test_should_strip_prefix_and_warn(self) -> None:
        result = sanitize({"_secret": "x"}, "payload")

        assert result.document == {"secret": "x"}
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, FieldRenameWarning)
        assert warning.message == "Property '_secret' renamed to 'secret'."

    def test_should_keep_reserved_fields(self) -> None:
        document = {field: "v" for field in RESERVED_FIELDS}
        result = sanitize(document, "payload")

        assert result.document == document
        assert result.warnings == []

    def test_clean_document_should_be_unchanged(self) -> None:
        document = {"_id": "a", "_rev": "1-x", "name": "widget", "tags": ["_x"]}
        result = sanitize(document, "payload")

        assert result.document == document
        assert list(result.document) == list(document)
        assert result.warnings == []

    def test_should_preserve_field_order(self) -> None:
        result = sanitize({"a": 1, "_b": 2, "c": 3}, "payload")

        assert list(result.document) == ["a", "b", "c"]

    def test_should_strip_until_legal(self) -> None:
        result = sanitize({"__x": 1, "__id": "doc"}, "payload")

        assert result.document == {"x": 1, "_id": "doc"}
        assert len(result.warnings) == 2

    def test_should_not_mutate_input(self) -> None:
        raw = {"_secret": "x"}
        sanitize(raw, "payload")

        assert raw == {"_secret": "x"}

    def test_should_rename_msgid_of_whole_message(self) -> None:
        result = sanitize({"_msgid": "abc", "payload": "hi"}, "msg")

        assert result.document == {"msgid": "abc", "payload": "hi"}

    def test_should_accept_non_string_keys(self) -> None:
        result = sanitize({1: "a", "name": "b"}, "payload")

        assert result.document == {"1": "a", "name": "b"}
        assert result.warnings == []

    def test_should_parse_text_before_cleaning(self) -> None:
        result = sanitize('{"_secret": "x"}', "payload")

        assert result.document == {"secret": "x"}

    def test_collision_should_raise(self) -> None:
        with pytest.raises(ConflictingFieldName) as exc_info:
            sanitize({"_name": "a", "name": "b"}, "payload")

        assert exc_info.value.details == {"field": "_name", "renamed": "name"}

    def test_collision_between_renames_should_raise(self) -> None:
        with pytest.raises(ConflictingFieldName):
            clean_document(Document({"_x": 1, "__x": 2}))

    @pytest.mark.parametrize(
        "document",
        [
            {"_a": 1, "b": 2},
            {"_attachments": {}, "_local": 1, "_design": "x"},
            {"__proto": 1, "_revs_info": []},
        ],
    )
    def test_no_illegal_prefixed_fields_remain(self, document: dict) -> None:
        result = sanitize(document, "payload")

        for name in result.document:
            assert not name.startswith("_") or name in RESERVED_FIELDS
