"""YAML rendering and writing of assembled documents."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import yaml

from proto_openapi.document_assembly.document_models import Document

GENERATED_HEADER = "# Generated with protoc-gen-openapi\n\n"


class _DocumentDumper(yaml.SafeDumper):
    """Safe dumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)


def render_document(document: Document) -> str:
    """Return the YAML text of one document, keys in canonical order."""
    body = yaml.dump(
        document.to_openapi(),
        Dumper=_DocumentDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )
    return GENERATED_HEADER + body


def write_documents(documents: Sequence[Document], output_dir: Path | str) -> list[Path]:
    """Write each document under `output_dir` at its own relative path."""
    root = Path(output_dir)
    written: list[Path] = []
    for document in documents:
        target = root / document.output_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_document(document), encoding="utf-8")
        written.append(target.resolve())
    return written
