"""Recursive conversion of descriptors into registered schema nodes."""

from __future__ import annotations

import posixpath
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field, replace
from typing import assert_never

from proto_openapi.configuration.generation_options import EnumRendering, GenerationOptions
from proto_openapi.descriptor_index.index_builder import DescriptorIndex
from proto_openapi.descriptor_index.type_models import (
    Cardinality,
    FieldDescriptor,
    MessageDescriptor,
    TypeKind,
    TypeRef,
)
from proto_openapi.descriptor_index.well_known_types import (
    ANY_TYPE,
    VALUE_DESCRIPTION,
    WELL_KNOWN_SCHEMAS,
    is_unsupported_builtin,
    is_well_known,
)
from proto_openapi.diagnostics import DiagnosticLog, Severity
from proto_openapi.errors import UnresolvedReferenceError, UnsupportedFieldError
from proto_openapi.naming.naming_policies import field_name, schema_name

from .expansion_chain import ExpansionChain
from .schema_models import (
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    ReferenceSchema,
    ScalarSchema,
    SchemaNode,
)
from .schema_registry import SchemaRegistry
from .shared_schemas import register_any

_SCALAR_SCHEMAS: Mapping[str, tuple[str, str | None]] = {
    "double": ("number", "double"),
    "float": ("number", "float"),
    "int32": ("integer", "int32"),
    "sint32": ("integer", "int32"),
    "sfixed32": ("integer", "int32"),
    "uint32": ("integer", "uint32"),
    "fixed32": ("integer", "uint32"),
    "int64": ("string", "int64"),
    "sint64": ("string", "int64"),
    "sfixed64": ("string", "int64"),
    "uint64": ("string", "uint64"),
    "fixed64": ("string", "uint64"),
    "bool": ("boolean", None),
    "string": ("string", None),
    "bytes": ("string", "bytes"),
}


@dataclass
class BuildContext:
    """State shared by every builder call during one document's generation."""

    index: DescriptorIndex
    options: GenerationOptions
    registry: SchemaRegistry = field(default_factory=SchemaRegistry)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    document_path: str = "openapi.yaml"
    local_files: Collection[str] | None = None
    document_paths: Mapping[str, str] = field(default_factory=dict)

    def is_local(self, file_name: str) -> bool:
        return self.local_files is None or file_name in self.local_files

    def external_document(self, file_name: str) -> str | None:
        """Return the generated document owning `file_name`, relative to this one.

        Types from files that get no document of their own return None and are
        built into this document instead.
        """
        if self.is_local(file_name):
            return None
        target = self.document_paths.get(file_name)
        if target is None:
            return None
        return posixpath.relpath(target, posixpath.dirname(self.document_path) or ".")


def document_path_for(file_name: str) -> str:
    """Return the source-relative output path for one proto file."""
    directory, base = posixpath.split(file_name)
    stem = base[: -len(".proto")] if base.endswith(".proto") else base
    return posixpath.join(directory, f"{stem}.openapi.yaml")


def message_type_ref(full_name: str) -> TypeRef:
    """Return the type reference for a method input or output type."""
    kind = TypeKind.WELL_KNOWN if is_well_known(full_name) else TypeKind.MESSAGE
    return TypeRef(kind, full_name)


class SchemaBuilder:
    """Builds schema nodes and keeps the registry deduplicated."""

    def __init__(self, context: BuildContext) -> None:
        self.context = context

    @property
    def _fully_qualified(self) -> bool:
        return self.context.options.fq_schema_naming

    def build(
        self,
        type_ref: TypeRef,
        current_depth: int = 0,
        chain: ExpansionChain | None = None,
        *,
        owner: str,
    ) -> SchemaNode:
        """Return the schema for a type, registering message schemas as needed."""
        active_chain = chain or ExpansionChain()
        try:
            if type_ref.kind == TypeKind.SCALAR:
                return _scalar_schema(type_ref.name)
            if type_ref.kind == TypeKind.ENUM:
                return self._enum_schema(type_ref.name, owner)
            if type_ref.kind == TypeKind.WELL_KNOWN:
                return self._well_known_schema(type_ref.name)
            if type_ref.kind == TypeKind.MESSAGE:
                return self._message_reference(type_ref.name, current_depth, active_chain, owner)
            assert_never(type_ref.kind)
        except UnsupportedFieldError as exc:
            self.context.diagnostics.report(Severity.WARNING, owner, str(exc))
            return ScalarSchema("string") if type_ref.kind == TypeKind.ENUM else ObjectSchema()

    def build_field(
        self,
        field_descriptor: FieldDescriptor,
        message: MessageDescriptor,
        current_depth: int = 0,
        chain: ExpansionChain | None = None,
    ) -> SchemaNode:
        """Return the property schema for one field, including cardinality."""
        owner = f"{message.full_name}.{field_descriptor.name}"
        element = self.build(field_descriptor.type_ref, current_depth, chain, owner=owner)
        node: SchemaNode
        if field_descriptor.cardinality == Cardinality.MAP:
            node = ObjectSchema(additional_properties=element)
        elif field_descriptor.cardinality == Cardinality.REPEATED:
            node = ArraySchema(items=element)
        else:
            node = element
        if field_descriptor.comment:
            node = replace(node, description=field_descriptor.comment)
        return node

    def build_object(
        self,
        message: MessageDescriptor,
        current_depth: int,
        chain: ExpansionChain,
        exclude: Collection[str] = (),
    ) -> ObjectSchema:
        """Expand a message into an object schema, skipping excluded field names."""
        naming = self.context.options.naming
        properties = tuple(
            (
                field_name(field_descriptor, naming),
                self.build_field(field_descriptor, message, current_depth, chain),
            )
            for field_descriptor in message.fields
            if field_descriptor.name not in exclude
        )
        return ObjectSchema(properties=properties, description=message.comment or None)

    def message_key(self, message: MessageDescriptor) -> str:
        return schema_name(message, self._fully_qualified)

    def _message_reference(
        self,
        full_name: str,
        current_depth: int,
        chain: ExpansionChain,
        owner: str,
    ) -> SchemaNode:
        message = self._lookup_message(full_name, owner)
        key = self.message_key(message)
        document = self.context.external_document(message.file_name)
        if document is not None:
            return ReferenceSchema(key, document=document)
        if full_name in chain or self.context.registry.holds(key, full_name):
            return ReferenceSchema(key)

        replaced = self.context.registry.reserve(key, full_name)
        if replaced is not None:
            self.context.diagnostics.report(
                Severity.ADVISORY,
                full_name,
                f"schema '{key}' previously generated for {replaced} is overwritten; "
                "enable fq_schema_naming to keep both",
            )
        schema = self.build_object(message, current_depth + 1, chain.push(full_name))
        self.context.registry.fill(key, full_name, schema)
        return ReferenceSchema(key)

    def _lookup_message(self, full_name: str, owner: str) -> MessageDescriptor:
        try:
            return self.context.index.lookup_message(full_name, owner)
        except UnresolvedReferenceError as exc:
            if is_unsupported_builtin(full_name):
                raise UnsupportedFieldError(full_name, owner) from exc
            raise

    def _enum_schema(self, full_name: str, owner: str) -> EnumSchema:
        try:
            enum = self.context.index.lookup_enum(full_name, owner)
        except UnresolvedReferenceError as exc:
            if is_unsupported_builtin(full_name):
                raise UnsupportedFieldError(full_name, owner) from exc
            raise
        if self.context.options.enum_type == EnumRendering.STRING:
            return EnumSchema("string", values=tuple(name for name, _ in enum.values))
        return EnumSchema("integer", format="enum")

    def _well_known_schema(self, full_name: str) -> SchemaNode:
        if full_name == ANY_TYPE:
            return register_any(self.context.registry, self._fully_qualified)
        rendering = WELL_KNOWN_SCHEMAS[full_name]
        schema_type = rendering.get("type")
        description = rendering.get("description")
        if schema_type == "array":
            return ArraySchema(items=ScalarSchema(None, description=VALUE_DESCRIPTION))
        if schema_type == "object":
            return ObjectSchema()
        return ScalarSchema(
            type=str(schema_type) if schema_type else None,
            format=str(rendering["format"]) if "format" in rendering else None,
            description=str(description) if description else None,
        )


def _scalar_schema(tag: str) -> ScalarSchema:
    schema_type, schema_format = _SCALAR_SCHEMAS[tag]
    return ScalarSchema(schema_type, schema_format)
