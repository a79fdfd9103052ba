"""Field and schema naming policies."""

from __future__ import annotations

from proto_openapi.configuration.generation_options import FieldNaming
from proto_openapi.descriptor_index.type_models import (
    EnumDescriptor,
    FieldDescriptor,
    MessageDescriptor,
)


def to_lower_camel(identifier: str) -> str:
    """Drop each underscore and upper-case the letter that follows it."""
    if "_" not in identifier:
        return identifier
    parts: list[str] = []
    upper_next = False
    for character in identifier:
        if character == "_":
            upper_next = True
            continue
        parts.append(character.upper() if upper_next else character)
        upper_next = False
    return "".join(parts)


def field_name(field: FieldDescriptor, naming: FieldNaming) -> str:
    """Return the serialized name of a field."""
    if naming == FieldNaming.PROTO:
        return field.name
    if field.json_name:
        return field.json_name
    return to_lower_camel(field.name)


def format_field_path(path: str, naming: FieldNaming) -> str:
    """Rename each dotted component of a field path."""
    if naming == FieldNaming.PROTO:
        return path
    return ".".join(to_lower_camel(part) for part in path.split("."))


def schema_name(descriptor: MessageDescriptor | EnumDescriptor, fully_qualified: bool) -> str:
    """Return the registry key for a message or enum."""
    if fully_qualified:
        return descriptor.full_name
    return descriptor.local_name.replace(".", "_")


def singular(collection: str) -> str:
    """Singularize a resource collection name used in a path pattern.

    Plurals formed with "es" are recognised only after "ss", "x" or a consonant
    followed by "us" (`addresses`, `boxes`, `statuses`). Other endings drop a
    single "s", so `caches` becomes `cache` and `houses` becomes `house`.
    """
    if collection.endswith("ies"):
        return collection[:-3] + "y"
    if collection.endswith("lves"):
        return collection[:-3] + "f"
    if collection.endswith(("sses", "xes")):
        return collection[:-2]
    if collection.endswith("uses") and collection[-5:-4] not in "aeiou":
        return collection[:-2]
    if collection.endswith("s") and not collection.endswith("ss"):
        return collection[:-1]
    return collection
