"""Descriptor index entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from google.api import http_pb2


class TypeKind(str, Enum):
    """Closed set of type kinds a field may reference."""

    MESSAGE = "message"
    ENUM = "enum"
    SCALAR = "scalar"
    WELL_KNOWN = "well_known"


class Cardinality(str, Enum):
    SINGLE = "single"
    REPEATED = "repeated"
    MAP = "map"


@dataclass(frozen=True)
class TypeRef:
    """Reference to a scalar tag or a fully-qualified message/enum name."""

    kind: TypeKind
    name: str

    @property
    def is_scalar_like(self) -> bool:
        """Return True for types that render as a single query-string value."""
        if self.kind in (TypeKind.SCALAR, TypeKind.ENUM):
            return True
        return self.kind == TypeKind.WELL_KNOWN and self.name in _SCALAR_WELL_KNOWN


_SCALAR_WELL_KNOWN = frozenset(
    {
        "google.protobuf.Timestamp",
        "google.protobuf.Duration",
        "google.protobuf.FieldMask",
        "google.protobuf.DoubleValue",
        "google.protobuf.FloatValue",
        "google.protobuf.Int64Value",
        "google.protobuf.UInt64Value",
        "google.protobuf.Int32Value",
        "google.protobuf.UInt32Value",
        "google.protobuf.BoolValue",
        "google.protobuf.StringValue",
        "google.protobuf.BytesValue",
        "google.type.Date",
        "google.type.DateTime",
    }
)


@dataclass(frozen=True)
class FieldDescriptor:  # pylint: disable=too-many-instance-attributes
    """One declared message field."""

    name: str
    number: int
    json_name: str | None
    cardinality: Cardinality
    type_ref: TypeRef
    map_key: TypeRef | None = None
    in_oneof: bool = False
    comment: str = ""


@dataclass(frozen=True)
class MessageDescriptor:
    """Message type with ordered fields."""

    full_name: str
    local_name: str
    package: str
    file_name: str
    fields: tuple[FieldDescriptor, ...]
    comment: str = ""

    def field_named(self, name: str) -> FieldDescriptor | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True)
class EnumDescriptor:
    """Enum type with ordered (name, number) members."""

    full_name: str
    local_name: str
    package: str
    file_name: str
    values: tuple[tuple[str, int], ...]
    comment: str = ""


@dataclass(frozen=True)
class MethodDescriptor:
    """RPC method with its optional HTTP annotation."""

    full_name: str
    name: str
    service_name: str
    input_type: str
    output_type: str
    http_rule: http_pb2.HttpRule | None
    comment: str = ""


@dataclass(frozen=True)
class ServiceDescriptor:
    """Service declared in a file selected for generation."""

    full_name: str
    name: str
    package: str
    file_name: str
    methods: tuple[MethodDescriptor, ...]
    comment: str = ""
    default_host: str | None = None


TypeDescriptor = MessageDescriptor | EnumDescriptor
