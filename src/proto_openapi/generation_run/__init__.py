"""Generation run exports."""

from .generation_use_case import (
    GenerationError,
    generate,
    load_descriptor_set,
    select_files_to_generate,
)
from .run_contracts import GeneratedFile, GenerationRequest, GenerationResult

__all__ = [
    "GeneratedFile",
    "GenerationError",
    "GenerationRequest",
    "GenerationResult",
    "generate",
    "load_descriptor_set",
    "select_files_to_generate",
]
