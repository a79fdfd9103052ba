"""Document writing exports."""

from .yaml_writer import GENERATED_HEADER, render_document, write_documents

__all__ = ["GENERATED_HEADER", "render_document", "write_documents"]
