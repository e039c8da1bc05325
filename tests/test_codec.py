"""Unit tests for the persisted document codec."""

import json

import pytest

from tododep.data.codec import decode, encode, TASK_FOREST_SCHEMA
from tododep.models import TaskNode, TaskForest
from tododep.recovery import CorruptionError, DecodeError


def _node(title, completed=False, details="", children=None):
    return TaskNode(title=title, details=details, completed=completed, children=children or [])


class TestRoundTrip:
    """Test decode(encode(forest)) reproduces the forest."""

    def test_empty_forest(self):
        """Test the empty forest round trips as an empty array."""
        assert encode(TaskForest()) == "[]\n"
        assert decode(encode(TaskForest())) == TaskForest()

    def test_nested_forest(self):
        """Test nested tasks, details and completion flags survive."""
        forest = TaskForest(root=[
            _node("Release", children=[
                _node("Write changelog", completed=True, details="include migration notes"),
                _node("Tag", children=[_node("Push tag")]),
            ]),
            _node("Holiday", completed=True),
        ])

        assert decode(encode(forest)) == forest

    def test_unicode_titles(self):
        """Test non-ASCII text is written as-is and read back."""
        forest = TaskForest(root=[_node("Café ☕"), _node("日本語のタスク")])
        document = encode(forest)

        assert "Café ☕" in document
        assert decode(document) == forest

    def test_deep_nesting_beyond_render_depth(self, make_chain):
        """Test levels hidden by rendering still persist."""
        forest = TaskForest(root=[make_chain(20)])
        decoded = decode(encode(forest))

        assert decoded == forest
        assert [node.title for node in decoded[0].walk()][-1] == "level 19"

    def test_unknown_fields_preserved(self):
        """Test extra keys written by other tools are kept after the known ones."""
        document = json.dumps([{
            "title": "A", "details": "", "completed": False, "children": [],
            "priority": "high",
        }])
        forest = decode(document)
        data = json.loads(encode(forest))

        assert list(data[0].keys()) == ["title", "details", "completed", "children", "priority"]
        assert data[0]["priority"] == "high"

    def test_decode_bytes(self):
        """Test raw UTF-8 file contents decode directly."""
        forest = TaskForest(root=[_node("Über")])
        assert decode(encode(forest).encode("utf-8")) == forest


class TestEncode:
    """Test the encoded document layout."""

    def test_field_order_and_indent(self):
        """Test fields are written in a fixed order with two space indentation."""
        forest = TaskForest(root=[_node("A")])
        assert encode(forest) == (
            '[\n'
            '  {\n'
            '    "title": "A",\n'
            '    "details": "",\n'
            '    "completed": false,\n'
            '    "children": []\n'
            '  }\n'
            ']\n'
        )

    def test_encoded_document_matches_schema(self):
        """Test encoded output satisfies the published schema."""
        from jsonschema import validate

        forest = TaskForest(root=[_node("A", children=[_node("B", completed=True)])])
        validate(instance=json.loads(encode(forest)), schema=TASK_FOREST_SCHEMA)


class TestDecodeErrors:
    """Test malformed documents are rejected outright."""

    @pytest.mark.parametrize("document", [
        "not json",
        "",
        "[",
        '{"title": "A", "details": "", "completed": false, "children": []}',
        '[{"title": "A", "completed": false, "children": []}]',
        '[{"title": "A", "details": "", "completed": "yes", "children": []}]',
        '[{"title": 3, "details": "", "completed": false, "children": []}]',
        '[{"title": "A", "details": "", "completed": false, "children": {}}]',
        '[{"title": "A", "details": "", "completed": false, "children": [{"title": "B"}]}]',
        '["A"]',
    ])
    def test_invalid_documents(self, document):
        """Test each kind of malformed document raises DecodeError."""
        with pytest.raises(DecodeError):
            decode(document)

    def test_decode_error_is_fatal_corruption(self):
        """Test decode failures belong to the corruption family."""
        with pytest.raises(CorruptionError):
            decode("not json")

    def test_invalid_utf8(self):
        """Test undecodable bytes raise DecodeError."""
        with pytest.raises(DecodeError, match="UTF-8"):
            decode(b"\xff\xfe[]")

    def test_schema_error_names_location(self):
        """Test schema failures point at the offending node."""
        document = '[{"title": "A", "details": "", "completed": false, "children": [{"title": 1, "details": "", "completed": false, "children": []}]}]'
        with pytest.raises(DecodeError, match="0/children/0/title"):
            decode(document)

    def test_pathological_nesting(self):
        """Test nesting deeper than the parser can follow is a decode error."""
        with pytest.raises(DecodeError):
            decode("[" * 100000 + "]" * 100000)
