"""JSON Schema fragment constructors.

Builders only ever receive already-resolved fragments; none of them looks at a
type node.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, NamedTuple

from .errors import UnsupportedPrimitiveError

JsonSchemaLiteral = str | int | float | bool
JsonSchemaComplex = dict[str, Any]
JsonSchema = JsonSchemaLiteral | JsonSchemaComplex

DRAFT_07 = "http://json-schema.org/draft-07/schema#"

NEVER_DESCRIPTION = "This is a never type"


class ResolvedProperty(NamedTuple):
    name: str
    is_optional: bool
    schema: JsonSchema


def build_literal(literal: JsonSchemaLiteral) -> JsonSchema:
    return literal


def build_primitive(kind: str) -> JsonSchema:
    if kind == "any":
        return build_any()
    if kind in {"void", "undefined"}:
        return {"type": "undefined"}
    if kind == "null":
        return {"type": "null"}
    if kind == "never":
        # No value is both a string and a number.
        return {"description": NEVER_DESCRIPTION, "allOf": [{"type": "string"}, {"type": "number"}]}
    if kind in {"string", "number", "boolean"}:
        return {"type": kind}
    raise UnsupportedPrimitiveError(kind)


def build_array(resolved: JsonSchema) -> JsonSchema:
    return {"type": "array", "items": resolved}


def build_tuple(resolved: Iterable[JsonSchema]) -> JsonSchema:
    return {"type": "array", "items": list(resolved)}


def build_enum(resolved: Iterable[tuple[str, JsonSchema]]) -> JsonSchema:
    """Enum members keep declaration order; their names are dropped."""
    return {"enum": [schema for _, schema in resolved]}


def build_object(
    properties: Iterable[ResolvedProperty],
    index: JsonSchema | None = None,
) -> JsonSchema:
    schema: JsonSchemaComplex = {
        "additionalProperties": False,
        "properties": {},
        "required": [],
        "type": "object",
    }
    for name, is_optional, resolved in properties:
        if not is_optional:
            schema["required"].append(name)
        schema["properties"][name] = resolved
    if not schema["required"]:
        del schema["required"]
    if index is not None:
        schema["patternProperties"] = {".*": index}
    return schema


def build_indexable_object(resolved: JsonSchema) -> JsonSchema:
    return {
        "additionalProperties": False,
        "patternProperties": {".*": resolved},
        "properties": {},
        "type": "object",
    }


def build_any() -> JsonSchema:
    return {}


def build_generic(name: str) -> JsonSchema:
    return {"description": f"Generic type parameter {name}"}


def build_any_of(resolved: Iterable[JsonSchema]) -> JsonSchema:
    return {"anyOf": list(resolved)}


def build_all_of(resolved: Iterable[JsonSchema]) -> JsonSchema:
    return {"allOf": list(resolved)}


def build_date() -> JsonSchema:
    return {"type": "string", "format": "date-time"}


def build_reference(name: str) -> JsonSchema:
    return {"$ref": f"#/definitions/{name}"}


def build_cycle_placeholder(name: str) -> JsonSchema:
    return {"description": f"Circular reference to {name}"}


def build_document(
    definitions: dict[str, JsonSchema],
    schema_uri: str = DRAFT_07,
) -> JsonSchemaComplex:
    """Bundle declaration schemas under ``definitions`` so ``$ref`` targets resolve."""
    return {"$schema": schema_uri, "definitions": dict(definitions)}
