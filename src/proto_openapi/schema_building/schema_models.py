"""Schema node entities and their OpenAPI rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, assert_never

SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass(frozen=True)
class ScalarSchema:
    """Primitive schema; a missing type means any value."""

    type: str | None
    format: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class EnumSchema:
    type: str
    format: str | None = None
    values: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class ArraySchema:
    items: SchemaNode
    description: str | None = None


@dataclass(frozen=True)
class ObjectSchema:
    """Object with ordered properties, or a map when additional_properties is set."""

    properties: tuple[tuple[str, SchemaNode], ...] = ()
    additional_properties: SchemaNode | bool | None = None
    description: str | None = None

    def property_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.properties)


@dataclass(frozen=True)
class ReferenceSchema:
    """Non-owning reference to a registry key, optionally in another document."""

    key: str
    document: str | None = None
    description: str | None = None

    @property
    def ref(self) -> str:
        return f"{self.document or ''}{SCHEMA_REF_PREFIX}{self.key}"


SchemaNode = ScalarSchema | EnumSchema | ArraySchema | ObjectSchema | ReferenceSchema


def to_openapi(node: SchemaNode) -> dict[str, Any]:
    """Render a schema node as an OpenAPI schema mapping."""
    rendered: dict[str, Any]
    if isinstance(node, ReferenceSchema):
        if node.description:
            return {"allOf": [{"$ref": node.ref}], "description": node.description}
        return {"$ref": node.ref}
    if isinstance(node, ScalarSchema):
        rendered = {}
        if node.type:
            rendered["type"] = node.type
        if node.format:
            rendered["format"] = node.format
    elif isinstance(node, EnumSchema):
        rendered = {"type": node.type}
        if node.values:
            rendered["enum"] = list(node.values)
        if node.format:
            rendered["format"] = node.format
    elif isinstance(node, ArraySchema):
        rendered = {"type": "array", "items": to_openapi(node.items)}
    elif isinstance(node, ObjectSchema):
        rendered = {"type": "object"}
        if node.properties:
            rendered["properties"] = {name: to_openapi(child) for name, child in node.properties}
        if isinstance(node.additional_properties, bool):
            rendered["additionalProperties"] = node.additional_properties
        elif node.additional_properties is not None:
            rendered["additionalProperties"] = to_openapi(node.additional_properties)
    else:
        assert_never(node)
    if node.description:
        rendered["description"] = node.description
    return rendered
