"""Tests for strict schema construction and structured output parsing."""

import json

import pytest
from pydantic import ValidationError

from openai_helper.core.exceptions import ApiResponseError, SchemaValidationError
from openai_helper.core.schema import (
    FieldSpec,
    build_response_format,
    build_strict_schema,
    parse_structured_output,
)


def _chat_response(content):
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


# ---------------------------------------------------------------------------
# build_strict_schema
# ---------------------------------------------------------------------------

class TestBuildStrictSchema:
    """Tests for build_strict_schema()."""

    def test_required_matches_field_names(self):
        fields = {
            "name": {"type": "string", "description": "Person name"},
            "age": {"type": "integer", "description": "Age in years"},
        }
        schema = build_strict_schema(fields)
        assert schema["required"] == ["name", "age"]
        assert schema["additionalProperties"] is False
        assert schema["type"] == "object"

    def test_properties_carry_type_and_description(self):
        schema = build_strict_schema({"score": {"type": "number", "description": "A score"}})
        assert schema["properties"] == {"score": {"type": "number", "description": "A score"}}

    def test_non_string_keys_become_strings(self):
        schema = build_strict_schema({1: {"type": "string"}, 2: {"type": "boolean"}})
        assert schema["required"] == ["1", "2"]
        assert set(schema["properties"]) == {"1", "2"}

    def test_empty_fields(self):
        schema = build_strict_schema({})
        assert schema["required"] == []
        assert schema["properties"] == {}
        assert schema["additionalProperties"] is False

    def test_accepts_field_spec_models(self):
        schema = build_strict_schema({"ok": FieldSpec(type="boolean", description="Whether it worked")})
        assert schema["properties"]["ok"] == {"type": "boolean", "description": "Whether it worked"}

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            build_strict_schema({"x": {"type": "datetime"}})


def test_build_response_format_envelope():
    """The schema is wrapped in a strict json_schema response format."""
    fields = {"summary": {"type": "string", "description": "One line"}}
    response_format = build_response_format(fields, name="summary_output")

    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "summary_output"
    assert response_format["json_schema"]["strict"] is True
    assert response_format["json_schema"]["schema"] == build_strict_schema(fields)


# ---------------------------------------------------------------------------
# parse_structured_output
# ---------------------------------------------------------------------------

class TestParseStructuredOutput:
    """Tests for parse_structured_output()."""

    def test_returns_decoded_object_unchanged(self):
        payload = {"name": "Ada", "age": 36, "tags": ["math"], "nested": {"a": None}}
        assert parse_structured_output(_chat_response(json.dumps(payload))) == payload

    def test_error_field_raises_api_error(self):
        response = {"error": {"message": "Invalid API key", "type": "invalid_request_error"}}
        with pytest.raises(ApiResponseError, match="Invalid API key"):
            parse_structured_output(response)

    def test_malformed_json_content(self):
        with pytest.raises(SchemaValidationError, match="not valid JSON"):
            parse_structured_output(_chat_response("{not json"))

    def test_json_array_is_rejected(self):
        with pytest.raises(SchemaValidationError, match="must be a JSON object"):
            parse_structured_output(_chat_response("[1, 2, 3]"))

    def test_missing_choices(self):
        with pytest.raises(SchemaValidationError, match="No structured output"):
            parse_structured_output({"id": "chatcmpl-123"})

    def test_null_content(self):
        with pytest.raises(SchemaValidationError, match="No structured output"):
            parse_structured_output(_chat_response(None))

    def test_legacy_function_call_arguments(self):
        response = {
            "choices": [
                {
                    "message": {
                        "role": "assistant",
                        "content": None,
                        "function_call": {"name": "extract", "arguments": '{"city": "Paris"}'},
                    }
                }
            ]
        }
        assert parse_structured_output(response) == {"city": "Paris"}

    def test_non_mapping_response(self):
        with pytest.raises(SchemaValidationError):
            parse_structured_output(["not", "a", "response"])


def test_keys_colliding_as_strings_are_required_once():
    """Keys equal after str() produce one property and one required entry."""
    schema = build_strict_schema({1: {"type": "string"}, "1": {"type": "integer"}})
    assert schema["required"] == ["1"]
    assert list(schema["properties"]) == ["1"]
