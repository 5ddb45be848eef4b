"""
Unit tests for extended JSON conversion helpers

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: tests/unit/test_convert.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Unit Test Suite

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Tests for document/filter parsing, fixture
                                file loading and serialization.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

import json

import pytest
from bson import ObjectId

from mongo_steps.convert import (
    IGNORE_DIFF,
    parse_documents,
    parse_filter,
    read_documents_file,
    serialize_documents,
)
from mongo_steps.errors import FileReadError, ParseError


# =============================================================================
# parse_documents Tests
# =============================================================================

class TestParseDocuments:
    """Tests for parsing extended JSON arrays"""

    def test_none_is_rejected(self):
        """Missing payload fails with a dedicated message"""
        with pytest.raises(ParseError, match="^data is nil$"):
            parse_documents(None)

    @pytest.mark.parametrize("text", ["malformed", "[", ""])
    def test_malformed_input(self, text):
        """Malformed JSON is wrapped in a ParseError"""
        with pytest.raises(ParseError, match="^error unmarshaling extjson: Expecting value"):
            parse_documents(text)

    @pytest.mark.parametrize("text", ['{"name": "John"}', "[1, 2]", '"text"'])
    def test_non_array_of_documents(self, text):
        """Only arrays of objects are accepted"""
        with pytest.raises(ParseError, match="expected an array of documents"):
            parse_documents(text)

    def test_empty_array(self):
        assert parse_documents("[]") == []

    def test_extended_types_are_decoded(self):
        """$oid wrappers become ObjectId values"""
        docs = parse_documents('[{"_id": {"$oid": "6351e55cb3b0c3a2b1f3e001"}, "age": 30}]')

        assert docs == [{"_id": ObjectId("6351e55cb3b0c3a2b1f3e001"), "age": 30}]

    def test_key_order_is_preserved(self):
        docs = parse_documents('[{"b": 1, "a": 2, "c": 3}]')

        assert list(docs[0]) == ["b", "a", "c"]


# =============================================================================
# parse_filter Tests
# =============================================================================

class TestParseFilter:
    """Tests for parsing query filters"""

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty_input_matches_all(self, text):
        assert parse_filter(text) == {}

    def test_filter_document(self):
        assert parse_filter('{"age": {"$gt": 25}}') == {"age": {"$gt": 25}}

    def test_malformed_filter(self):
        with pytest.raises(ParseError, match="^error unmarshaling extjson: "):
            parse_filter("malformed")

    def test_array_is_not_a_filter(self):
        with pytest.raises(ParseError, match="expected a document"):
            parse_filter("[]")


# =============================================================================
# Fixture File Tests
# =============================================================================

class TestReadDocumentsFile:
    """Tests for loading fixture files"""

    def test_customers(self, resources_dir):
        docs = read_documents_file(resources_dir / "fixtures" / "customers.json")

        assert [doc["name"] for doc in docs] == ["John Doe", "Jane Doe"]

    def test_empty(self, resources_dir):
        assert read_documents_file(resources_dir / "fixtures" / "empty.json") == []

    def test_malformed(self, resources_dir):
        with pytest.raises(ParseError, match="^error unmarshaling extjson: "):
            read_documents_file(resources_dir / "fixtures" / "malformed.json")

    def test_missing_file(self, resources_dir):
        path = resources_dir / "fixtures" / "unknown.json"

        with pytest.raises(FileReadError, match="No such file or directory") as exc_info:
            read_documents_file(path)

        assert exc_info.value.path == str(path)


# =============================================================================
# serialize_documents Tests
# =============================================================================

class TestSerializeDocuments:
    """Tests for rendering documents for comparison"""

    def test_empty_set(self):
        assert serialize_documents([]) == "[]"

    def test_documents_keep_input_order(self):
        docs = [{"name": "Jane"}, {"name": "John"}, {"name": "Alice"}]

        result = json.loads(serialize_documents(docs))

        assert result == docs

    def test_extended_json_wrappers(self):
        docs = [{"_id": ObjectId("6351e55cb3b0c3a2b1f3e001"), "age": 30}]

        result = json.loads(serialize_documents(docs))

        assert result == [{"_id": {"$oid": "6351e55cb3b0c3a2b1f3e001"}, "age": 30}]

    def test_ignore_diff_marker_is_literal(self):
        """The marker survives serialization unescaped"""
        data = serialize_documents([{"_id": IGNORE_DIFF}])

        assert '"<ignore-diff>"' in data
        assert "\\u003c" not in data

    def test_legacy_marker_is_normalized(self):
        data = serialize_documents([{"_id": "<ignored-diff>"}])

        assert json.loads(data) == [{"_id": IGNORE_DIFF}]

    def test_round_trip(self):
        """Parsing serialized documents gives back the same documents"""
        docs = [
            {
                "_id": ObjectId("6351e55cb3b0c3a2b1f3e001"),
                "name": "John Doe",
                "score": 1.5,
                "active": True,
                "tags": ["a", "b"],
                "manager": None,
                "address": {"street": "Street 1", "city": "City 1"},
            },
            {"_id": ObjectId("6351e55cb3b0c3a2b1f3e002"), "name": "Jane Doe"},
        ]

        assert parse_documents(serialize_documents(docs)) == docs
