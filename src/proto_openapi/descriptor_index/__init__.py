"""Descriptor index exports."""

from .index_builder import DescriptorIndex
from .type_models import (
    Cardinality,
    EnumDescriptor,
    FieldDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeRef,
)

__all__ = [
    "Cardinality",
    "DescriptorIndex",
    "EnumDescriptor",
    "FieldDescriptor",
    "MessageDescriptor",
    "MethodDescriptor",
    "ServiceDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "TypeRef",
]
