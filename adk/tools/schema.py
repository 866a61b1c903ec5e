"""
Argument Schemas
================

Tools describe their arguments with JSON Schema because that is what model
providers expect. To validate what the model actually sends, the schema is
turned into a pydantic model once, when the tool is created, and every
payload is checked against it before the tool runs.

Supported JSON Schema subset:
- "type": string, number, integer, boolean, array, object
- "enum" (rendered as a Literal)
- "required"
- "description", "default"
- numeric bounds (minimum / maximum / exclusiveMinimum / exclusiveMaximum)
- string bounds (minLength / maxLength)
- nested objects with "properties", arrays with "items"
- "additionalProperties": false forbids unknown fields
"""

import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from adk.errors import InvalidArgumentsError

_SIMPLE_TYPES: dict[str, Any] = {
    "string": str,
    "number": float,
    "integer": int,
    "boolean": bool,
}

_CONSTRAINTS = {
    "minimum": "ge",
    "maximum": "le",
    "exclusiveMinimum": "gt",
    "exclusiveMaximum": "lt",
    "minLength": "min_length",
    "maxLength": "max_length",
}


def empty_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


def _model_name(name: str) -> str:
    parts = [p for p in name.replace("-", "_").split("_") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts) + "Arguments"


def _python_type(prop: dict[str, Any], name: str) -> Any:
    """Map one JSON Schema property to a Python type annotation."""
    if "enum" in prop:
        return Literal[tuple(prop["enum"])]

    json_type = prop.get("type", "string")
    if isinstance(json_type, list):
        # e.g. ["string", "null"]
        non_null = [t for t in json_type if t != "null"]
        inner = _python_type({**prop, "type": non_null[0] if non_null else "string"}, name)
        return Optional[inner] if "null" in json_type else inner

    if json_type in _SIMPLE_TYPES:
        return _SIMPLE_TYPES[json_type]
    if json_type == "array":
        items = prop.get("items")
        return list[_python_type(items, f"{name}_item")] if items else list[Any]
    if json_type == "object":
        if prop.get("properties"):
            return model_from_schema(name, prop)
        return dict[str, Any]
    if json_type == "null":
        return type(None)
    return Any


def model_from_schema(name: str, schema: dict[str, Any]) -> type[BaseModel]:
    """
    Build a pydantic model that validates arguments for a JSON Schema.

    Args:
        name: Tool (or nested property) name, used for the model name
        schema: An object schema

    Returns:
        A pydantic model class
    """
    properties: dict[str, Any] = schema.get("properties") or {}
    required = set(schema.get("required") or [])

    fields: dict[str, Any] = {}
    for prop_name, prop in properties.items():
        annotation = _python_type(prop, prop_name)
        kwargs = {
            pydantic_key: prop[schema_key]
            for schema_key, pydantic_key in _CONSTRAINTS.items()
            if schema_key in prop
        }
        if "description" in prop:
            kwargs["description"] = prop["description"]

        if prop_name in required:
            fields[prop_name] = (annotation, Field(..., **kwargs))
        else:
            fields[prop_name] = (Optional[annotation], Field(prop.get("default"), **kwargs))

    extra = "forbid" if schema.get("additionalProperties") is False else "ignore"
    return create_model(
        _model_name(name),
        __config__=ConfigDict(extra=extra),
        **fields,
    )


def schema_from_model(model: type[BaseModel]) -> dict[str, Any]:
    """JSON Schema for a pydantic model, trimmed to what providers need."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    schema.setdefault("required", [])
    return schema


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def parse_payload(arguments: Any, tool_name: str | None = None) -> dict[str, Any]:
    """
    Turn a raw payload into an argument dict.

    Raises:
        InvalidArgumentsError: If the payload is not a JSON object
    """
    if arguments is None or arguments == "":
        return {}
    if isinstance(arguments, (str, bytes)):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise InvalidArgumentsError(
                f"Arguments are not valid JSON: {e.msg}", tool_name=tool_name
            ) from e
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(
            f"Arguments must be a JSON object, got {type(arguments).__name__}",
            tool_name=tool_name,
        )
    return arguments


def validate_arguments(
    model: type[BaseModel],
    arguments: Any,
    tool_name: str | None = None,
) -> dict[str, Any]:
    """
    Validate a raw payload against an argument model.

    Returns:
        The validated (and type-coerced) arguments

    Raises:
        InvalidArgumentsError: On missing fields, type mismatches or
            constraint violations
    """
    payload = parse_payload(arguments, tool_name)
    try:
        validated = model.model_validate(payload)
    except ValidationError as e:
        raise InvalidArgumentsError(
            f"Invalid arguments: {_describe(e)}", tool_name=tool_name
        ) from e
    # Omitted optional fields stay omitted so the callee's own defaults apply
    data = validated.model_dump(exclude_unset=True)
    for name, info in type(validated).model_fields.items():
        if name not in data and info.default is not None and not info.is_required():
            data[name] = info.default
    return data
