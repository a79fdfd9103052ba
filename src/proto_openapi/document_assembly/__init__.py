"""Document assembly exports."""

from .document_assembler import MERGED_DOCUMENT_PATH, assemble_documents
from .document_models import OPENAPI_VERSION, Document, DocumentInfo, Operation, Tag

__all__ = [
    "MERGED_DOCUMENT_PATH",
    "OPENAPI_VERSION",
    "Document",
    "DocumentInfo",
    "Operation",
    "Tag",
    "assemble_documents",
]
