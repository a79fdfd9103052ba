"""HTTP binding entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from proto_openapi.descriptor_index.type_models import FieldDescriptor
from proto_openapi.schema_building.schema_models import SchemaNode

from .path_template import PathTemplate

WILDCARD_BODY = "*"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"


@dataclass(frozen=True)
class MethodBinding:  # pylint: disable=too-many-instance-attributes
    """One HTTP rule (primary or additional) attached to a method."""

    method: str
    verb: str
    template: PathTemplate
    body: str = ""
    response_body: str = ""
    index: int = 0

    @property
    def has_wildcard_body(self) -> bool:
        return self.body == WILDCARD_BODY


@dataclass(frozen=True)
class Parameter:
    name: str
    location: ParameterLocation
    schema: SchemaNode
    required: bool = False
    description: str | None = None


@dataclass(frozen=True)
class ClassifiedBinding:
    """Request fields of one binding split into path, query and body parts."""

    binding: MethodBinding
    path: str
    path_parameters: tuple[Parameter, ...]
    query_parameters: tuple[Parameter, ...]
    path_bound_fields: frozenset[str]
    body_field: FieldDescriptor | None = None

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        return self.path_parameters + self.query_parameters

    @property
    def top_level_path_fields(self) -> frozenset[str]:
        """Path-bound field names declared directly on the request message."""
        return frozenset(name for name in self.path_bound_fields if "." not in name)
