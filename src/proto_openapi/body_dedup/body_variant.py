"""Request-body schema variants with path-bound fields removed."""

from __future__ import annotations

from collections.abc import Collection

from proto_openapi.descriptor_index.type_models import MessageDescriptor
from proto_openapi.http_binding.binding_models import ClassifiedBinding
from proto_openapi.schema_building.expansion_chain import ExpansionChain
from proto_openapi.schema_building.schema_builder import SchemaBuilder
from proto_openapi.schema_building.schema_models import ReferenceSchema

BODY_SUFFIX = "_Body"
_BODY_IDENTITY_SUFFIX = "#body"


def needs_body_variant(
    classified: ClassifiedBinding, request: MessageDescriptor | None, enabled: bool
) -> bool:
    """Return True when a wildcard body would otherwise repeat path-bound fields."""
    if not enabled or request is None or not classified.binding.has_wildcard_body:
        return False
    return any(request.field_named(name) for name in classified.top_level_path_fields)


def derive_body_schema(
    builder: SchemaBuilder,
    request: MessageDescriptor,
    path_bound_fields: Collection[str],
) -> ReferenceSchema:
    """Register `<key>_Body` holding every field of `request` except the path-bound ones.

    The original entry for `request` is left untouched so that responses and
    other bindings keep referencing the complete schema.
    """
    registry = builder.context.registry
    key = builder.message_key(request) + BODY_SUFFIX
    identity = request.full_name + _BODY_IDENTITY_SUFFIX
    if registry.holds(key, identity):
        return ReferenceSchema(key)
    registry.reserve(key, identity)
    schema = builder.build_object(
        request,
        current_depth=1,
        chain=ExpansionChain(),
        exclude=frozenset(path_bound_fields),
    )
    registry.fill(key, identity, schema)
    return ReferenceSchema(key)
