"""Declarative schema tree and the structural validator that walks it.

The same tree validates JSON request bodies and XML documents after they have
been converted to plain dicts and lists. XML carries every scalar as text, so
a ``number`` node accepts strings that look numeric.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any, Literal

PrimitiveType = Literal["string", "number"]

_NUMERIC_STRING = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


@dataclass(frozen=True, slots=True)
class PrimitiveSchema:
    type: PrimitiveType
    enum: tuple[Any, ...] | None = None
    pattern: str | None = None


@dataclass(frozen=True, slots=True)
class ArraySchema:
    items: SchemaNode
    min_items: int | None = None
    max_items: int | None = None

    @property
    def type(self) -> str:
        return "array"


@dataclass(frozen=True, slots=True)
class ObjectSchema:
    required: tuple[str, ...] = ()
    properties: dict[str, SchemaNode] = field(default_factory=dict)

    @property
    def type(self) -> str:
        return "object"


SchemaNode = ObjectSchema | ArraySchema | PrimitiveSchema


def runtime_type(data: Any) -> str:
    """Classify ``data`` using JSON type names; anything else is ``unknown``."""
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, (list, tuple)):
        return "array"
    if isinstance(data, dict):
        return "object"
    return "unknown"


def is_numeric_string(value: Any) -> bool:
    return isinstance(value, str) and _NUMERIC_STRING.match(value) is not None


def validate(data: Any, schema: SchemaNode, path: str = "root") -> list[str]:
    """Return ``"{path}: {message}"`` errors for ``data`` against ``schema``; empty means valid.

    Errors come out in traversal order: at an object, missing required fields
    before nested property errors; at an array, bound errors before element
    errors. A type mismatch reports a single error and stops descent.
    """
    actual = runtime_type(data)
    lenient_number = schema.type == "number" and is_numeric_string(data)
    if actual != schema.type and not lenient_number:
        return [f"{path}: Expected type {schema.type} but found {actual}"]

    if isinstance(schema, PrimitiveSchema):
        return _validate_primitive(data, schema, path)
    if isinstance(schema, ObjectSchema):
        return _validate_object(data, schema, path)
    return _validate_array(data, schema, path)


def _validate_primitive(data: Any, schema: PrimitiveSchema, path: str) -> list[str]:
    errors: list[str] = []
    if schema.enum is not None and data not in schema.enum:
        allowed = ", ".join(str(option) for option in schema.enum)
        errors.append(f"{path}: Value '{data}' is not in allowed enum: {allowed}")
    if schema.pattern is not None and isinstance(data, str) and re.search(schema.pattern, data) is None:
        errors.append(f"{path}: Value '{data}' does not match pattern {schema.pattern}")
    return errors


def _validate_object(data: dict[str, Any], schema: ObjectSchema, path: str) -> list[str]:
    errors = [f"{path}: Missing required field '{name}'" for name in schema.required if name not in data]
    for name, child in schema.properties.items():
        if name in data:
            errors.extend(validate(data[name], child, f"{path}.{name}"))
    return errors


def _validate_array(data: list[Any], schema: ArraySchema, path: str) -> list[str]:
    errors: list[str] = []
    if schema.min_items is not None and len(data) < schema.min_items:
        errors.append(f"{path}: Array has {len(data)} items, minimum is {schema.min_items}")
    if schema.max_items is not None and len(data) > schema.max_items:
        errors.append(f"{path}: Array has {len(data)} items, maximum is {schema.max_items}")
    for index, item in enumerate(data):
        errors.extend(validate(item, schema.items, f"{path}[{index}]"))
    return errors


def schema_to_dict(schema: SchemaNode) -> dict[str, Any]:
    """Render a schema tree in JSON-schema vocabulary for publishing."""
    if isinstance(schema, ObjectSchema):
        return {
            "type": "object",
            "required": list(schema.required),
            "properties": {name: schema_to_dict(child) for name, child in schema.properties.items()},
        }
    if isinstance(schema, ArraySchema):
        rendered: dict[str, Any] = {"type": "array", "items": schema_to_dict(schema.items)}
        if schema.min_items is not None:
            rendered["minItems"] = schema.min_items
        if schema.max_items is not None:
            rendered["maxItems"] = schema.max_items
        return rendered

    rendered = {"type": schema.type}
    if schema.enum is not None:
        rendered["enum"] = list(schema.enum)
    if schema.pattern is not None:
        rendered["pattern"] = schema.pattern
    return rendered
