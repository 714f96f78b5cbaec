"""Strict structured-output schema construction and extraction."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from openai_helper.core.exceptions import ApiResponseError, SchemaValidationError

logger = logging.getLogger(__name__)

PrimitiveType = Literal["string", "number", "integer", "boolean", "array", "object", "null"]


class FieldSpec(BaseModel):
    """Descriptor for one structured-output field."""

    type: PrimitiveType = Field(description="JSON Schema primitive type of the field")
    description: str = Field(default="", description="Human-readable description of the field")


def _coerce_field(spec: FieldSpec | Mapping[str, Any]) -> FieldSpec:
    if isinstance(spec, FieldSpec):
        return spec
    return FieldSpec.model_validate(dict(spec))


def build_strict_schema(fields: Mapping[Any, FieldSpec | Mapping[str, Any]]) -> dict[str, Any]:
    """Build a strict JSON Schema object from field descriptors.

    Every declared field is required and no other properties are allowed.

    Args:
        fields: Mapping of output field name to descriptor

    Returns:
        JSON Schema dict

    Raises:
        pydantic.ValidationError: If a descriptor has no valid type
    """
    properties: dict[str, Any] = {}
    for name, spec in fields.items():
        properties[str(name)] = _coerce_field(spec).model_dump()

    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def build_response_format(
    fields: Mapping[Any, FieldSpec | Mapping[str, Any]],
    name: str = "structured_output",
) -> dict[str, Any]:
    """Wrap a strict schema into a chat ``response_format`` envelope."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "strict": True,
            "schema": build_strict_schema(fields),
        },
    }


def _message_payload(response: Mapping[str, Any]) -> str | None:
    """Return the structured payload string from a chat response, if any."""
    try:
        message = response["choices"][0]["message"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(message, Mapping):
        return None

    content = message.get("content")
    if isinstance(content, str):
        return content

    # Legacy function-calling responses carry the payload as arguments
    function_call = message.get("function_call")
    if isinstance(function_call, Mapping) and isinstance(function_call.get("arguments"), str):
        return function_call["arguments"]
    return None


def parse_structured_output(response: Any) -> dict[str, Any]:
    """Decode the structured output object from a chat completion response.

    Args:
        response: Decoded JSON body of a chat completion response

    Returns:
        The decoded JSON object, unchanged

    Raises:
        ApiResponseError: If the response carries an ``error`` field
        SchemaValidationError: If there is no payload, it is not valid JSON,
            or it does not decode to an object
    """
    if not isinstance(response, Mapping):
        raise SchemaValidationError("Response is not a JSON object.")

    error = response.get("error")
    if error:
        message = error.get("message") if isinstance(error, Mapping) else str(error)
        raise ApiResponseError(message or "Unknown API error")

    payload = _message_payload(response)
    if payload is None:
        raise SchemaValidationError("No structured output found in the response.")

    try:
        decoded = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.debug("Structured payload was not valid JSON: %r", payload[:200])
        raise SchemaValidationError(f"Structured output is not valid JSON: {e}") from e

    if not isinstance(decoded, dict):
        raise SchemaValidationError(
            f"Structured output must be a JSON object, got {type(decoded).__name__}."
        )
    return decoded
