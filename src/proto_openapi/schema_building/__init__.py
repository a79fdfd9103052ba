"""Schema building exports."""

from .expansion_chain import ExpansionChain
from .schema_builder import BuildContext, SchemaBuilder, document_path_for, message_type_ref
from .schema_models import (
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    ReferenceSchema,
    ScalarSchema,
    SchemaNode,
    to_openapi,
)
from .schema_registry import SchemaRegistry
from .shared_schemas import register_any, register_status

__all__ = [
    "ArraySchema",
    "BuildContext",
    "EnumSchema",
    "ExpansionChain",
    "ObjectSchema",
    "ReferenceSchema",
    "ScalarSchema",
    "SchemaBuilder",
    "SchemaNode",
    "SchemaRegistry",
    "document_path_for",
    "message_type_ref",
    "register_any",
    "register_status",
    "to_openapi",
]
