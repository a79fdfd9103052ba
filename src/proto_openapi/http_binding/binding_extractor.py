"""HTTP rule extraction and request field classification."""

from __future__ import annotations

from collections.abc import Collection

from google.api import http_pb2

from proto_openapi.descriptor_index.type_models import (
    Cardinality,
    FieldDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    TypeKind,
)
from proto_openapi.diagnostics import DiagnosticLog, Severity
from proto_openapi.errors import InvalidTemplateError
from proto_openapi.naming.naming_policies import field_name
from proto_openapi.schema_building.expansion_chain import ExpansionChain
from proto_openapi.schema_building.schema_builder import SchemaBuilder
from proto_openapi.schema_building.schema_models import ArraySchema, ScalarSchema, SchemaNode

from .binding_models import (
    WILDCARD_BODY,
    ClassifiedBinding,
    MethodBinding,
    Parameter,
    ParameterLocation,
)
from .path_template import parse_path_template

_STANDARD_VERBS = ("get", "put", "post", "delete", "patch")
_CUSTOM_VERBS = ("head", "options", "trace")


def extract(
    method: MethodDescriptor, diagnostics: DiagnosticLog | None = None
) -> list[MethodBinding]:
    """Return the primary binding followed by additional bindings, in declaration order."""
    if method.http_rule is None:
        return []
    rules = [method.http_rule, *method.http_rule.additional_bindings]
    bindings: list[MethodBinding] = []
    for index, rule in enumerate(rules):
        verb_and_path = _verb_and_path(rule)
        if verb_and_path is None:
            if diagnostics is not None:
                diagnostics.report(
                    Severity.WARNING,
                    method.full_name,
                    f"HTTP binding #{index} has no supported verb and is skipped",
                )
            continue
        verb, path = verb_and_path
        bindings.append(
            MethodBinding(
                method=method.full_name,
                verb=verb,
                template=parse_path_template(path, method.full_name),
                body=rule.body,
                response_body=rule.response_body,
                index=index,
            )
        )
    return bindings


def _verb_and_path(rule: http_pb2.HttpRule) -> tuple[str, str] | None:
    pattern = rule.WhichOneof("pattern")
    if pattern in _STANDARD_VERBS:
        return pattern, getattr(rule, pattern)
    if pattern == "custom":
        kind = rule.custom.kind.strip().lower()
        if kind in _CUSTOM_VERBS:
            return kind, rule.custom.path
    return None


def classify(
    binding: MethodBinding,
    request: MessageDescriptor | None,
    builder: SchemaBuilder,
) -> ClassifiedBinding:
    """Split request fields into path, query and body parts for one binding."""
    context = builder.context
    naming = context.options.naming
    rendered_path, rendered_parameters = binding.template.render(naming)
    variables = {variable.field_path: variable for variable in binding.template.variables}

    path_parameters: list[Parameter] = []
    for rendered in rendered_parameters:
        target = _resolve_field_path(binding, request, rendered.field_path, builder)
        if rendered.collection is not None:
            path_parameters.append(
                Parameter(
                    name=rendered.name,
                    location=ParameterLocation.PATH,
                    schema=ScalarSchema("string"),
                    required=True,
                    description=f"The {rendered.name} id.",
                )
            )
            continue
        owner_message, field_descriptor = target
        description = field_descriptor.comment or None
        if description is None and variables[rendered.field_path].captures_remainder:
            description = "Matches the remaining path segments."
        owner = _owner(owner_message, field_descriptor)
        schema = builder.build(field_descriptor.type_ref, owner=owner)
        path_parameters.append(
            Parameter(
                name=rendered.name,
                location=ParameterLocation.PATH,
                schema=schema,
                required=True,
                description=description,
            )
        )

    path_bound = frozenset(variables)
    body_field = None
    if binding.body and binding.body != WILDCARD_BODY:
        body_field = request.field_named(binding.body) if request else None
        if body_field is None:
            raise InvalidTemplateError(
                binding.method,
                f"body selector '{binding.body}' names no field of {_message_name(request)}",
            )

    query_parameters: list[Parameter] = []
    if request is not None and binding.body != WILDCARD_BODY:
        excluded = set(path_bound)
        if body_field is not None:
            excluded.add(body_field.name)
        _collect_query_parameters(
            request,
            builder,
            binding=binding,
            excluded=excluded,
            proto_prefix="",
            name_prefix="",
            chain=ExpansionChain().push(request.full_name),
            out=query_parameters,
        )

    return ClassifiedBinding(
        binding=binding,
        path=rendered_path,
        path_parameters=tuple(path_parameters),
        query_parameters=tuple(query_parameters),
        path_bound_fields=path_bound,
        body_field=body_field,
    )


def resolve_response_field(
    binding: MethodBinding, response: MessageDescriptor | None
) -> FieldDescriptor | None:
    """Return the field named by `response_body`, if any."""
    if not binding.response_body:
        return None
    response_field = response.field_named(binding.response_body) if response else None
    if response_field is None:
        raise InvalidTemplateError(
            binding.method,
            f"response_body selector '{binding.response_body}' names no field of "
            f"{_message_name(response)}",
        )
    return response_field


def _resolve_field_path(
    binding: MethodBinding,
    request: MessageDescriptor | None,
    field_path: str,
    builder: SchemaBuilder,
) -> tuple[MessageDescriptor, FieldDescriptor]:
    message = request
    parts = field_path.split(".")
    for position, part in enumerate(parts):
        field_descriptor = message.field_named(part) if message else None
        if message is None or field_descriptor is None:
            raise InvalidTemplateError(
                binding.method,
                f"path variable '{field_path}' names no field of {_message_name(request)}",
            )
        if position == len(parts) - 1:
            return message, field_descriptor
        if (
            field_descriptor.type_ref.kind != TypeKind.MESSAGE
            or field_descriptor.cardinality != Cardinality.SINGLE
        ):
            raise InvalidTemplateError(
                binding.method,
                f"path variable '{field_path}' traverses non-message field '{part}'",
            )
        message = builder.context.index.find_message(field_descriptor.type_ref.name)
    raise InvalidTemplateError(binding.method, f"empty path variable in '{binding.template.raw}'")


# pylint: disable=too-many-arguments
def _collect_query_parameters(
    message: MessageDescriptor,
    builder: SchemaBuilder,
    *,
    binding: MethodBinding,
    excluded: Collection[str],
    proto_prefix: str,
    name_prefix: str,
    chain: ExpansionChain,
    out: list[Parameter],
) -> None:
    context = builder.context
    for field_descriptor in message.fields:
        proto_path = proto_prefix + field_descriptor.name
        if proto_path in excluded:
            continue
        name = name_prefix + field_name(field_descriptor, context.options.naming)
        type_ref = field_descriptor.type_ref
        if field_descriptor.cardinality == Cardinality.MAP:
            _report_omitted(binding, proto_path, "map fields", builder)
            continue
        if type_ref.kind == TypeKind.MESSAGE:
            if field_descriptor.cardinality == Cardinality.REPEATED:
                _report_omitted(binding, proto_path, "repeated message fields", builder)
                continue
            nested = context.index.find_message(type_ref.name)
            if nested is None or not chain.can_enter(nested.full_name, context.options.depth):
                continue
            _collect_query_parameters(
                nested,
                builder,
                binding=binding,
                excluded=excluded,
                proto_prefix=proto_path + ".",
                name_prefix=name + ".",
                chain=chain.push(nested.full_name),
                out=out,
            )
            continue
        if not type_ref.is_scalar_like:
            _report_omitted(binding, proto_path, f"{type_ref.name} fields", builder)
            continue
        out.append(
            Parameter(
                name=name,
                location=ParameterLocation.QUERY,
                schema=_query_schema(field_descriptor, message, builder),
                description=field_descriptor.comment or None,
            )
        )


# pylint: enable=too-many-arguments


def _report_omitted(
    binding: MethodBinding, proto_path: str, reason: str, builder: SchemaBuilder
) -> None:
    builder.context.diagnostics.report(
        Severity.WARNING,
        binding.method,
        f"field '{proto_path}' omitted from query parameters: {reason} cannot be query parameters",
    )


def _owner(message: MessageDescriptor, field_descriptor: FieldDescriptor) -> str:
    return f"{message.full_name}.{field_descriptor.name}"


def _message_name(message: MessageDescriptor | None) -> str:
    return message.full_name if message else "the request message"


def _query_schema(
    field_descriptor: FieldDescriptor, message: MessageDescriptor, builder: SchemaBuilder
) -> SchemaNode:
    element = builder.build(field_descriptor.type_ref, owner=_owner(message, field_descriptor))
    if field_descriptor.cardinality == Cardinality.REPEATED:
        return ArraySchema(items=element)
    return element
