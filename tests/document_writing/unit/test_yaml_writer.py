"""YAML document writer tests."""

from __future__ import annotations

from pathlib import Path

import yaml
from proto_builders import library_file
from proto_openapi.configuration import GenerationOptions
from proto_openapi.descriptor_index import DescriptorIndex
from proto_openapi.diagnostics import DiagnosticLog
from proto_openapi.document_assembly import assemble_documents
from proto_openapi.document_writing import GENERATED_HEADER, render_document, write_documents


def _library_documents():
    index = DescriptorIndex.from_files([library_file()])
    return assemble_documents(index, GenerationOptions(), DiagnosticLog())


def test_rendered_document_starts_with_generated_header() -> None:
    [document] = _library_documents()

    text = render_document(document)

    assert text.startswith(GENERATED_HEADER)
    assert text[len(GENERATED_HEADER) :].startswith("openapi: 3.0.3\n")


def test_rendered_document_round_trips_to_same_mapping() -> None:
    [document] = _library_documents()

    parsed = yaml.safe_load(render_document(document))

    assert parsed == document.to_openapi()
    assert list(parsed) == ["openapi", "info", "servers", "paths", "components", "tags"]


def test_rendering_is_byte_identical_across_runs() -> None:
    first = [render_document(document) for document in _library_documents()]
    second = [render_document(document) for document in _library_documents()]

    assert first == second


def test_block_sequences_are_indented_under_their_key() -> None:
    [document] = _library_documents()

    text = render_document(document)

    assert "\ntags:\n  - name: LibraryService\n" in text


def test_write_documents_creates_nested_directories(tmp_path: Path) -> None:
    [document] = _library_documents()
    document.output_path = "library/v1/library.openapi.yaml"

    written = write_documents([document], tmp_path / "out")

    target = tmp_path / "out" / "library" / "v1" / "library.openapi.yaml"
    assert written == [target.resolve()]
    assert target.read_text(encoding="utf-8") == render_document(document)
