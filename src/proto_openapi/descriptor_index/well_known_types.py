"""Fixed OpenAPI renderings for protobuf well-known and common types."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

ANY_TYPE = "google.protobuf.Any"
EMPTY_TYPE = "google.protobuf.Empty"
UNSUPPORTED_PACKAGE_PREFIX = "google.protobuf."

VALUE_DESCRIPTION = (
    "Represents a dynamically typed value which can be either null, a number, a string, "
    "a boolean, a recursive struct value, or a list of values."
)

# Inline renderings; Any is emitted as a shared component instead.
WELL_KNOWN_SCHEMAS: Mapping[str, Mapping[str, object]] = MappingProxyType(
    {
        "google.protobuf.Timestamp": {"type": "string", "format": "date-time"},
        "google.protobuf.Duration": {"type": "string"},
        "google.protobuf.FieldMask": {"type": "string", "format": "field-mask"},
        "google.protobuf.Empty": {"type": "object"},
        "google.protobuf.Struct": {"type": "object"},
        "google.protobuf.Value": {"description": VALUE_DESCRIPTION},
        "google.protobuf.ListValue": {"type": "array"},
        "google.protobuf.DoubleValue": {"type": "number", "format": "double"},
        "google.protobuf.FloatValue": {"type": "number", "format": "float"},
        "google.protobuf.Int64Value": {"type": "string", "format": "int64"},
        "google.protobuf.UInt64Value": {"type": "string", "format": "uint64"},
        "google.protobuf.Int32Value": {"type": "integer", "format": "int32"},
        "google.protobuf.UInt32Value": {"type": "integer", "format": "uint32"},
        "google.protobuf.BoolValue": {"type": "boolean"},
        "google.protobuf.StringValue": {"type": "string"},
        "google.protobuf.BytesValue": {"type": "string", "format": "bytes"},
        "google.type.Date": {"type": "string", "format": "date"},
        "google.type.DateTime": {"type": "string", "format": "date-time"},
        ANY_TYPE: {},
    }
)


def is_well_known(full_name: str) -> bool:
    return full_name in WELL_KNOWN_SCHEMAS


def is_unsupported_builtin(full_name: str) -> bool:
    """Return True for google.protobuf types with no rendering in the table."""
    return full_name.startswith(UNSUPPORTED_PACKAGE_PREFIX) and not is_well_known(full_name)
