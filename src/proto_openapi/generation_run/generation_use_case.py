"""Generation use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from proto_openapi.descriptor_index.index_builder import DescriptorIndex
from proto_openapi.diagnostics import DiagnosticLog
from proto_openapi.document_assembly.document_assembler import assemble_documents
from proto_openapi.document_writing.yaml_writer import render_document
from proto_openapi.errors import ProtoOpenAPIError

from .run_contracts import GeneratedFile, GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when a generation run cannot be completed."""


def generate(request: GenerationRequest) -> GenerationResult:
    """Transform one descriptor closure into rendered OpenAPI documents."""
    diagnostics = DiagnosticLog()
    try:
        index = DescriptorIndex.from_files(request.file_protos, request.files_to_generate)
        documents = assemble_documents(index, request.options, diagnostics)
    except ProtoOpenAPIError as exc:
        raise GenerationError(str(exc)) from exc

    files = tuple(
        GeneratedFile(path=document.output_path, content=render_document(document))
        for document in documents
    )
    logger.info(
        "Generated %d document(s) with %d diagnostic(s)", len(files), len(diagnostics.entries)
    )
    return GenerationResult(
        documents=tuple(documents),
        files=files,
        diagnostics=diagnostics.entries,
    )


def load_descriptor_set(
    descriptor_set_path: Path | str,
) -> list[descriptor_pb2.FileDescriptorProto]:
    """Read a binary FileDescriptorSet as written by `protoc --descriptor_set_out`."""
    path = Path(descriptor_set_path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise GenerationError(f"Descriptor set not readable: {path}: {exc}") from exc
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(payload)
    except DecodeError as exc:
        raise GenerationError(f"Invalid descriptor set {path}: {exc}") from exc
    return list(descriptor_set.file)


def select_files_to_generate(
    file_protos: Sequence[descriptor_pb2.FileDescriptorProto], requested: Sequence[str]
) -> list[str]:
    """Return the requested files, or every file declaring a service when none are given."""
    known = [file_proto.name for file_proto in file_protos]
    if requested:
        missing = [name for name in requested if name not in known]
        if missing:
            raise GenerationError(f"Files not found in descriptor set: {', '.join(missing)}")
        return list(requested)
    return [file_proto.name for file_proto in file_protos if file_proto.service]
