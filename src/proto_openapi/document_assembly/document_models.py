"""Document assembly entities and their OpenAPI rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from proto_openapi.http_binding.binding_models import Parameter, ParameterLocation
from proto_openapi.schema_building.schema_models import SchemaNode, to_openapi
from proto_openapi.schema_building.schema_registry import SchemaRegistry

OPENAPI_VERSION = "3.0.3"
JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class Operation:  # pylint: disable=too-many-instance-attributes
    """One verb on one path, derived from a single method binding."""

    method: str
    verb: str
    operation_id: str
    tags: tuple[str, ...]
    parameters: tuple[Parameter, ...] = ()
    description: str | None = None
    request_body: SchemaNode | None = None
    response: SchemaNode | None = None
    default_error: SchemaNode | None = None

    def to_openapi(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"tags": list(self.tags)}
        if self.description:
            rendered["description"] = self.description
        rendered["operationId"] = self.operation_id
        if self.parameters:
            rendered["parameters"] = [_render_parameter(item) for item in self.parameters]
        if self.request_body is not None:
            rendered["requestBody"] = {
                "content": {JSON_MEDIA_TYPE: {"schema": to_openapi(self.request_body)}},
                "required": True,
            }
        ok_response: dict[str, Any] = {"description": "OK"}
        if self.response is not None:
            ok_response["content"] = {JSON_MEDIA_TYPE: {"schema": to_openapi(self.response)}}
        responses: dict[str, Any] = {"200": ok_response}
        if self.default_error is not None:
            responses["default"] = {
                "description": "Default error response",
                "content": {JSON_MEDIA_TYPE: {"schema": to_openapi(self.default_error)}},
            }
        rendered["responses"] = responses
        return rendered


@dataclass(frozen=True)
class DocumentInfo:
    title: str
    version: str
    description: str | None = None


@dataclass(frozen=True)
class Tag:
    name: str
    description: str | None = None


@dataclass
class Document:
    """Paths and schema registry slice for one output file."""

    output_path: str
    info: DocumentInfo
    registry: SchemaRegistry
    paths: dict[str, dict[str, Operation]] = field(default_factory=dict)
    servers: list[str] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    def operations(self) -> list[Operation]:
        return [operation for item in self.paths.values() for operation in item.values()]

    def to_openapi(self) -> dict[str, Any]:
        """Render the document with keys in canonical order."""
        info: dict[str, Any] = {"title": self.info.title}
        if self.info.description:
            info["description"] = self.info.description
        info["version"] = self.info.version
        rendered: dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": info}
        if self.servers:
            rendered["servers"] = [{"url": url} for url in self.servers]
        rendered["paths"] = {
            path: {verb: operation.to_openapi() for verb, operation in item.items()}
            for path, item in self.paths.items()
        }
        rendered["components"] = {
            "schemas": {key: to_openapi(schema) for key, schema in self.registry.items()}
        }
        if self.tags:
            rendered["tags"] = [_render_tag(tag) for tag in self.tags]
        return rendered


def _render_parameter(parameter: Parameter) -> dict[str, Any]:
    rendered: dict[str, Any] = {"name": parameter.name, "in": parameter.location.value}
    if parameter.description:
        rendered["description"] = parameter.description
    if parameter.required or parameter.location == ParameterLocation.PATH:
        rendered["required"] = True
    rendered["schema"] = to_openapi(parameter.schema)
    return rendered


def _render_tag(tag: Tag) -> dict[str, Any]:
    rendered: dict[str, Any] = {"name": tag.name}
    if tag.description:
        rendered["description"] = tag.description
    return rendered
