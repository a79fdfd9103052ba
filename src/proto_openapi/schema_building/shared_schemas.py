"""Schemas that have no descriptor of their own but are shared across operations."""

from __future__ import annotations

from .schema_models import ArraySchema, ObjectSchema, ReferenceSchema, ScalarSchema
from .schema_registry import SchemaRegistry

ANY_IDENTITY = "google.protobuf.Any"
STATUS_IDENTITY = "google.rpc.Status"

_ANY_DESCRIPTION = (
    "Contains an arbitrary serialized message along with a @type that describes the type "
    "of the serialized message."
)
_STATUS_DESCRIPTION = (
    "The `Status` type defines a logical error model that is suitable for different "
    "programming environments, including REST APIs and RPC APIs."
)
_CODE_DESCRIPTION = "The status code, which should be an enum value of google.rpc.Code."
_MESSAGE_DESCRIPTION = "A developer-facing error message, which should be in English."
_DETAILS_DESCRIPTION = "A list of messages that carry the error details."


def any_key(fully_qualified: bool) -> str:
    return ANY_IDENTITY if fully_qualified else "GoogleProtobufAny"


def status_key(fully_qualified: bool) -> str:
    return STATUS_IDENTITY if fully_qualified else "Status"


def register_any(registry: SchemaRegistry, fully_qualified: bool) -> ReferenceSchema:
    """Register the shared Any schema at most once and return a reference to it."""
    key = any_key(fully_qualified)
    type_property = ScalarSchema("string", description="The type of the serialized message.")
    registry.register(
        key,
        ANY_IDENTITY,
        ObjectSchema(
            properties=(("@type", type_property),),
            additional_properties=True,
            description=_ANY_DESCRIPTION,
        ),
    )
    return ReferenceSchema(key)


def register_status(registry: SchemaRegistry, fully_qualified: bool) -> ReferenceSchema:
    """Register the shared Status schema and its Any dependency at most once."""
    key = status_key(fully_qualified)
    if registry.holds(key, STATUS_IDENTITY):
        return ReferenceSchema(key)
    registry.reserve(key, STATUS_IDENTITY)
    any_reference = register_any(registry, fully_qualified)
    registry.fill(
        key,
        STATUS_IDENTITY,
        ObjectSchema(
            properties=(
                ("code", ScalarSchema("integer", "int32", description=_CODE_DESCRIPTION)),
                ("message", ScalarSchema("string", description=_MESSAGE_DESCRIPTION)),
                ("details", ArraySchema(items=any_reference, description=_DETAILS_DESCRIPTION)),
            ),
            description=_STATUS_DESCRIPTION,
        ),
    )
    return ReferenceSchema(key)
