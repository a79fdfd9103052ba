"""Descriptor index construction from FileDescriptorProto sets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from google.api import annotations_pb2, client_pb2
from google.protobuf import descriptor_pb2

from proto_openapi.errors import UnresolvedReferenceError

from . import source_comments as tags
from .source_comments import CommentPath, collect_leading_comments
from .type_models import (
    Cardinality,
    EnumDescriptor,
    FieldDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
    TypeKind,
    TypeRef,
)
from .well_known_types import is_unsupported_builtin, is_well_known

logger = logging.getLogger(__name__)

_FieldProto = descriptor_pb2.FieldDescriptorProto

_SCALAR_TAGS: Mapping[int, str] = {
    _FieldProto.TYPE_DOUBLE: "double",
    _FieldProto.TYPE_FLOAT: "float",
    _FieldProto.TYPE_INT64: "int64",
    _FieldProto.TYPE_UINT64: "uint64",
    _FieldProto.TYPE_INT32: "int32",
    _FieldProto.TYPE_FIXED64: "fixed64",
    _FieldProto.TYPE_FIXED32: "fixed32",
    _FieldProto.TYPE_BOOL: "bool",
    _FieldProto.TYPE_STRING: "string",
    _FieldProto.TYPE_BYTES: "bytes",
    _FieldProto.TYPE_UINT32: "uint32",
    _FieldProto.TYPE_SFIXED32: "sfixed32",
    _FieldProto.TYPE_SFIXED64: "sfixed64",
    _FieldProto.TYPE_SINT32: "sint32",
    _FieldProto.TYPE_SINT64: "sint64",
}


@dataclass(frozen=True)
class _RawMessage:
    """Message proto with the location data needed for conversion."""

    full_name: str
    local_name: str
    package: str
    file_name: str
    proto: descriptor_pb2.DescriptorProto
    path: CommentPath
    comments: Mapping[CommentPath, str]


class DescriptorIndex:
    """O(1) lookup from fully-qualified name to message and enum descriptors."""

    def __init__(
        self,
        messages: Mapping[str, MessageDescriptor],
        enums: Mapping[str, EnumDescriptor],
        services: Sequence[ServiceDescriptor],
        generated_files: Sequence[str],
    ) -> None:
        self._messages = dict(messages)
        self._enums = dict(enums)
        self.services: tuple[ServiceDescriptor, ...] = tuple(services)
        self.generated_files: tuple[str, ...] = tuple(generated_files)

    @classmethod
    def from_files(
        cls,
        file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
        files_to_generate: Sequence[str] | None = None,
    ) -> DescriptorIndex:
        """Build the index over a file closure; services come from the generated files."""
        files = list(file_protos)
        generated = (
            list(files_to_generate)
            if files_to_generate is not None
            else [file_proto.name for file_proto in files]
        )
        raw_messages: dict[str, _RawMessage] = {}
        map_entries: dict[str, descriptor_pb2.DescriptorProto] = {}
        enums: dict[str, EnumDescriptor] = {}
        comments_by_file: dict[str, Mapping[CommentPath, str]] = {}

        for file_proto in files:
            comments = collect_leading_comments(file_proto)
            comments_by_file[file_proto.name] = comments
            _collect_types(
                file_proto,
                comments=comments,
                raw_messages=raw_messages,
                map_entries=map_entries,
                enums=enums,
            )

        known_names = set(raw_messages) | set(enums)
        messages = {
            name: _convert_message(raw, map_entries, known_names, set(enums))
            for name, raw in raw_messages.items()
        }

        files_by_name = {file_proto.name: file_proto for file_proto in files}
        services: list[ServiceDescriptor] = []
        for file_name in generated:
            file_proto = files_by_name.get(file_name)
            if file_proto is None:
                raise UnresolvedReferenceError(file_name, "files_to_generate")
            services.extend(_convert_services(file_proto, comments_by_file[file_name]))

        index = cls(messages, enums, services, generated)
        index.validate()
        return index

    def find_message(self, full_name: str) -> MessageDescriptor | None:
        return self._messages.get(full_name)

    def lookup_message(self, full_name: str, owner: str) -> MessageDescriptor:
        message = self._messages.get(full_name)
        if message is None:
            raise UnresolvedReferenceError(full_name, owner)
        return message

    def lookup_enum(self, full_name: str, owner: str) -> EnumDescriptor:
        enum = self._enums.get(full_name)
        if enum is None:
            raise UnresolvedReferenceError(full_name, owner)
        return enum

    def messages_in_file(self, file_name: str) -> tuple[MessageDescriptor, ...]:
        return tuple(
            message for message in self._messages.values() if message.file_name == file_name
        )

    def validate(self) -> None:
        """Raise UnresolvedReferenceError for method signatures outside the closure."""
        for service in self.services:
            for method in service.methods:
                for type_name in (method.input_type, method.output_type):
                    if is_well_known(type_name) or type_name in self._messages:
                        continue
                    raise UnresolvedReferenceError(type_name, method.full_name)


def _collect_types(
    file_proto: descriptor_pb2.FileDescriptorProto,
    *,
    comments: Mapping[CommentPath, str],
    raw_messages: dict[str, _RawMessage],
    map_entries: dict[str, descriptor_pb2.DescriptorProto],
    enums: dict[str, EnumDescriptor],
) -> None:
    package = file_proto.package
    prefix = f"{package}." if package else ""

    for index, enum_proto in enumerate(file_proto.enum_type):
        enums[prefix + enum_proto.name] = _convert_enum(
            enum_proto,
            prefix + enum_proto.name,
            enum_proto.name,
            file_proto,
            comments.get((tags.ENUM_TYPE_TAG, index), ""),
        )

    pending: list[tuple[descriptor_pb2.DescriptorProto, str, CommentPath]] = [
        (message_proto, message_proto.name, (tags.MESSAGE_TYPE_TAG, index))
        for index, message_proto in enumerate(file_proto.message_type)
    ]
    while pending:
        message_proto, local_name, path = pending.pop(0)
        full_name = prefix + local_name
        if message_proto.options.map_entry:
            map_entries[full_name] = message_proto
            continue
        raw_messages[full_name] = _RawMessage(
            full_name=full_name,
            local_name=local_name,
            package=package,
            file_name=file_proto.name,
            proto=message_proto,
            path=path,
            comments=comments,
        )
        for index, nested in enumerate(message_proto.nested_type):
            pending.append(
                (nested, f"{local_name}.{nested.name}", path + (tags.NESTED_TYPE_TAG, index))
            )
        for index, enum_proto in enumerate(message_proto.enum_type):
            enum_local = f"{local_name}.{enum_proto.name}"
            enums[prefix + enum_local] = _convert_enum(
                enum_proto,
                prefix + enum_local,
                enum_local,
                file_proto,
                comments.get(path + (tags.NESTED_ENUM_TAG, index), ""),
            )


def _convert_enum(
    enum_proto: descriptor_pb2.EnumDescriptorProto,
    full_name: str,
    local_name: str,
    file_proto: descriptor_pb2.FileDescriptorProto,
    comment: str,
) -> EnumDescriptor:
    return EnumDescriptor(
        full_name=full_name,
        local_name=local_name,
        package=file_proto.package,
        file_name=file_proto.name,
        values=tuple((value.name, value.number) for value in enum_proto.value),
        comment=comment,
    )


def _convert_message(
    raw: _RawMessage,
    map_entries: Mapping[str, descriptor_pb2.DescriptorProto],
    known_names: set[str],
    enum_names: set[str],
) -> MessageDescriptor:
    fields = []
    for index, field_proto in enumerate(raw.proto.field):
        owner = f"{raw.full_name}.{field_proto.name}"
        type_name = field_proto.type_name.lstrip(".")
        map_key: TypeRef | None = None
        if type_name in map_entries:
            entry = map_entries[type_name]
            key_proto, value_proto = entry.field[0], entry.field[1]
            cardinality = Cardinality.MAP
            map_key = _type_ref(key_proto, known_names, enum_names, owner)
            type_ref = _type_ref(value_proto, known_names, enum_names, owner)
        else:
            cardinality = (
                Cardinality.REPEATED
                if field_proto.label == _FieldProto.LABEL_REPEATED
                else Cardinality.SINGLE
            )
            type_ref = _type_ref(field_proto, known_names, enum_names, owner)
        fields.append(
            FieldDescriptor(
                name=field_proto.name,
                number=field_proto.number,
                json_name=field_proto.json_name if field_proto.HasField("json_name") else None,
                cardinality=cardinality,
                type_ref=type_ref,
                map_key=map_key,
                in_oneof=field_proto.HasField("oneof_index") and not field_proto.proto3_optional,
                comment=raw.comments.get(raw.path + (tags.FIELD_TAG, index), ""),
            )
        )
    return MessageDescriptor(
        full_name=raw.full_name,
        local_name=raw.local_name,
        package=raw.package,
        file_name=raw.file_name,
        fields=tuple(fields),
        comment=raw.comments.get(raw.path, ""),
    )


def _type_ref(
    field_proto: descriptor_pb2.FieldDescriptorProto,
    known_names: set[str],
    enum_names: set[str],
    owner: str,
) -> TypeRef:
    scalar = _SCALAR_TAGS.get(field_proto.type)
    if scalar is not None:
        return TypeRef(TypeKind.SCALAR, scalar)
    type_name = field_proto.type_name.lstrip(".")
    if is_well_known(type_name):
        return TypeRef(TypeKind.WELL_KNOWN, type_name)
    kind = TypeKind.ENUM if field_proto.type == _FieldProto.TYPE_ENUM else TypeKind.MESSAGE
    if type_name in known_names:
        if kind == TypeKind.MESSAGE and type_name in enum_names:
            kind = TypeKind.ENUM
        return TypeRef(kind, type_name)
    if is_unsupported_builtin(type_name):
        # Rendered with a fallback schema by the builder.
        logger.debug("Unsupported builtin type %s referenced by %s", type_name, owner)
        return TypeRef(kind, type_name)
    raise UnresolvedReferenceError(type_name, owner)


def _convert_services(
    file_proto: descriptor_pb2.FileDescriptorProto,
    comments: Mapping[CommentPath, str],
) -> list[ServiceDescriptor]:
    prefix = f"{file_proto.package}." if file_proto.package else ""
    services = []
    for service_index, service_proto in enumerate(file_proto.service):
        service_full_name = prefix + service_proto.name
        service_path = (tags.SERVICE_TAG, service_index)
        methods = []
        for method_index, method_proto in enumerate(service_proto.method):
            http_rule = None
            if method_proto.options.HasExtension(annotations_pb2.http):
                http_rule = method_proto.options.Extensions[annotations_pb2.http]
            methods.append(
                MethodDescriptor(
                    full_name=f"{service_full_name}.{method_proto.name}",
                    name=method_proto.name,
                    service_name=service_proto.name,
                    input_type=method_proto.input_type.lstrip("."),
                    output_type=method_proto.output_type.lstrip("."),
                    http_rule=http_rule,
                    comment=comments.get(service_path + (tags.METHOD_TAG, method_index), ""),
                )
            )
        default_host = None
        if service_proto.options.HasExtension(client_pb2.default_host):
            default_host = service_proto.options.Extensions[client_pb2.default_host] or None
        services.append(
            ServiceDescriptor(
                full_name=service_full_name,
                name=service_proto.name,
                package=file_proto.package,
                file_name=file_proto.name,
                methods=tuple(methods),
                comment=comments.get(service_path, ""),
                default_host=default_host,
            )
        )
    return services
