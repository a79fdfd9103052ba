"""Fold method bindings and schemas into one or more documents."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass

from proto_openapi.body_dedup.body_variant import derive_body_schema, needs_body_variant
from proto_openapi.configuration.generation_options import GenerationOptions, OutputMode
from proto_openapi.descriptor_index.index_builder import DescriptorIndex
from proto_openapi.descriptor_index.type_models import (
    FieldDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
)
from proto_openapi.descriptor_index.well_known_types import EMPTY_TYPE
from proto_openapi.diagnostics import DiagnosticLog, Severity
from proto_openapi.errors import InvalidTemplateError
from proto_openapi.http_binding.binding_extractor import classify, extract, resolve_response_field
from proto_openapi.http_binding.binding_models import ClassifiedBinding
from proto_openapi.schema_building.schema_builder import (
    BuildContext,
    SchemaBuilder,
    document_path_for,
    message_type_ref,
)
from proto_openapi.schema_building.schema_models import SchemaNode
from proto_openapi.schema_building.schema_registry import SchemaRegistry
from proto_openapi.schema_building.shared_schemas import register_status

from .document_models import Document, DocumentInfo, Operation, Tag

logger = logging.getLogger(__name__)

MERGED_DOCUMENT_PATH = "openapi.yaml"


@dataclass(frozen=True)
class _PlannedMethod:
    """Validated bindings of one method, ready to be turned into operations."""

    service: ServiceDescriptor
    method: MethodDescriptor
    request: MessageDescriptor | None
    response: MessageDescriptor | None
    bindings: tuple[tuple[ClassifiedBinding, FieldDescriptor | None], ...]


def assemble_documents(
    index: DescriptorIndex,
    options: GenerationOptions,
    diagnostics: DiagnosticLog,
) -> list[Document]:
    """Return the documents for all generated files under the configured output mode."""
    if options.output_mode == OutputMode.MERGED:
        return [
            _assemble_document(
                index,
                options,
                diagnostics,
                services=index.services,
                document_path=MERGED_DOCUMENT_PATH,
                local_files=None,
                document_paths={},
            )
        ]

    document_paths = {
        file_name: document_path_for(file_name) for file_name in index.generated_files
    }
    documents = []
    for file_name in index.generated_files:
        documents.append(
            _assemble_document(
                index,
                options,
                diagnostics,
                services=[service for service in index.services if service.file_name == file_name],
                document_path=document_paths[file_name],
                local_files=(file_name,),
                document_paths=document_paths,
            )
        )
    return documents


# pylint: disable=too-many-arguments
def _assemble_document(
    index: DescriptorIndex,
    options: GenerationOptions,
    diagnostics: DiagnosticLog,
    *,
    services: Sequence[ServiceDescriptor],
    document_path: str,
    local_files: Collection[str] | None,
    document_paths: Mapping[str, str],
) -> Document:
    context = BuildContext(
        index=index,
        options=options,
        registry=SchemaRegistry(),
        diagnostics=diagnostics,
        document_path=document_path,
        local_files=local_files,
        document_paths=document_paths,
    )
    builder = SchemaBuilder(context)
    document = Document(
        output_path=document_path,
        info=_document_info(services, options),
        registry=context.registry,
    )

    for service in services:
        operation_count = 0
        for method in service.methods:
            planned = _plan_method(service, method, builder)
            if planned is None:
                continue
            for classified, response_field in planned.bindings:
                operation = _build_operation(planned, classified, response_field, builder)
                _add_operation(document, classified.path, operation, diagnostics)
                operation_count += 1
        if operation_count:
            document.tags.append(Tag(name=service.name, description=service.comment or None))
            if service.default_host:
                server = _server_url(service.default_host)
                if server not in document.servers:
                    document.servers.append(server)

    if local_files is not None:
        for file_name in local_files:
            for message in index.messages_in_file(file_name):
                builder.build(message_type_ref(message.full_name), owner=message.full_name)

    logger.debug(
        "Assembled %s with %d operations and %d schemas",
        document_path,
        len(document.operations()),
        len(context.registry),
    )
    return document


# pylint: enable=too-many-arguments


def _plan_method(
    service: ServiceDescriptor, method: MethodDescriptor, builder: SchemaBuilder
) -> _PlannedMethod | None:
    """Validate every binding of a method; report and skip the method on template errors."""
    index = builder.context.index
    request = index.find_message(method.input_type)
    response = index.find_message(method.output_type)
    try:
        bindings = extract(method, builder.context.diagnostics)
        planned = tuple(
            (classify(binding, request, builder), resolve_response_field(binding, response))
            for binding in bindings
        )
    except InvalidTemplateError as exc:
        builder.context.diagnostics.report(Severity.ERROR, method.full_name, exc.detail)
        return None
    if not planned:
        logger.debug("Skipping %s: no HTTP annotation", method.full_name)
        return None
    return _PlannedMethod(
        service=service,
        method=method,
        request=request,
        response=response,
        bindings=planned,
    )


def _build_operation(
    planned: _PlannedMethod,
    classified: ClassifiedBinding,
    response_field: FieldDescriptor | None,
    builder: SchemaBuilder,
) -> Operation:
    options = builder.context.options
    method = planned.method
    binding = classified.binding

    request_body: SchemaNode | None = None
    if binding.has_wildcard_body:
        if planned.request is not None and needs_body_variant(
            classified, planned.request, options.wildcard_body_dedup
        ):
            request_body = derive_body_schema(
                builder, planned.request, classified.top_level_path_fields
            )
        else:
            request_body = builder.build(
                message_type_ref(method.input_type), owner=method.full_name
            )
    elif classified.body_field is not None and planned.request is not None:
        request_body = builder.build_field(classified.body_field, planned.request)

    response: SchemaNode | None
    if response_field is not None and planned.response is not None:
        response = builder.build_field(response_field, planned.response)
    elif method.output_type == EMPTY_TYPE:
        response = None
    else:
        response = builder.build(message_type_ref(method.output_type), owner=method.full_name)

    default_error = None
    if options.default_response:
        default_error = register_status(builder.context.registry, options.fq_schema_naming)

    operation_id = f"{planned.service.name}_{method.name}"
    if binding.index:
        operation_id = f"{operation_id}_{binding.index}"
    return Operation(
        method=method.full_name,
        verb=binding.verb,
        operation_id=operation_id,
        tags=(planned.service.name,),
        parameters=classified.parameters,
        description=method.comment or None,
        request_body=request_body,
        response=response,
        default_error=default_error,
    )


def _add_operation(
    document: Document, path: str, operation: Operation, diagnostics: DiagnosticLog
) -> None:
    path_item = document.paths.setdefault(path, {})
    existing = path_item.get(operation.verb)
    if existing is not None:
        diagnostics.report(
            Severity.WARNING,
            operation.method,
            f"{operation.verb.upper()} {path} already declared by {existing.method}; "
            "the later declaration wins",
        )
    path_item[operation.verb] = operation


def _document_info(
    services: Sequence[ServiceDescriptor], options: GenerationOptions
) -> DocumentInfo:
    sole_service = services[0] if len(services) == 1 else None
    title = options.title
    if title is None:
        title = f"{sole_service.name} API" if sole_service else ""
    description = options.description
    if description is None and sole_service is not None:
        description = sole_service.comment or None
    return DocumentInfo(title=title, version=options.version, description=description)


def _server_url(default_host: str) -> str:
    if "://" in default_host:
        return default_host
    return f"https://{default_host}"
