import pytest

from oracle_hcm_mcp.bridge_core.exceptions import ToolValidationError
from oracle_hcm_mcp.bridge_core.tools import SchemaValidator


def test_assert_no_recursive_refs_no_recursion():
    schema = {
        "type": "object",
        "properties": {
            "prop1": {"type": "string"},
            "prop2": {"type": "object", "properties": {"subprop": {"type": "integer"}}},
        },
    }
    # Should not raise
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_shared_definition_is_not_a_cycle():
    schema = {
        "$defs": {"Date": {"type": "string"}},
        "properties": {"start": {"$ref": "#/$defs/Date"}, "end": {"$ref": "#/$defs/Date"}},
    }
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion():
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_removes_metadata():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "MySchema",
        "type": "object",
        "properties": {"field": {"type": "string", "title": "FieldTitle"}},
        "definitions": {"SomeDef": {}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert "$schema" not in sanitized
    assert "$id" not in sanitized
    assert "title" not in sanitized
    assert "definitions" not in sanitized
    assert "title" not in sanitized["properties"]["field"]


def test_sanitize_schema_collapses_optional_to_nullable_type():
    schema = {
        "type": "object",
        "properties": {
            "optional_field": {
                "anyOf": [{"type": "string", "description": "A date"}, {"type": "null"}],
                "description": "Parent description",
                "default": None,
            }
        },
    }
    field = SchemaValidator.sanitize_schema(schema)["properties"]["optional_field"]

    assert "anyOf" not in field
    assert field["type"] == ["string", "null"]
    # the parent's description wins
    assert field["description"] == "Parent description"
    assert field["default"] is None


def test_sanitize_schema_enforces_additional_properties():
    schema = {"type": "object", "properties": {"field": {"type": "string"}}}

    assert SchemaValidator.sanitize_schema(schema)["additionalProperties"] is False


def test_sanitize_schema_does_not_modify_input():
    schema = {"type": "object", "title": "T", "properties": {}}

    SchemaValidator.sanitize_schema(schema)

    assert schema == {"type": "object", "title": "T", "properties": {}}
