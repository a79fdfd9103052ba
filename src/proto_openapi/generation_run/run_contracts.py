"""Generation run entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from google.protobuf import descriptor_pb2

from proto_openapi.configuration.generation_options import GenerationOptions
from proto_openapi.diagnostics import Diagnostic
from proto_openapi.document_assembly.document_models import Document


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract: the descriptor closure, the files to render and the options."""

    file_protos: Sequence[descriptor_pb2.FileDescriptorProto]
    files_to_generate: Sequence[str] | None = None
    options: GenerationOptions = field(default_factory=GenerationOptions)


@dataclass(frozen=True)
class GeneratedFile:
    path: str
    content: str


@dataclass(frozen=True)
class GenerationResult:
    """Output contract for one completed generation pass."""

    documents: tuple[Document, ...]
    files: tuple[GeneratedFile, ...]
    diagnostics: tuple[Diagnostic, ...]
