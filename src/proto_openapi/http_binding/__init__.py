"""HTTP binding exports."""

from .binding_extractor import classify, extract, resolve_response_field
from .binding_models import (
    WILDCARD_BODY,
    ClassifiedBinding,
    MethodBinding,
    Parameter,
    ParameterLocation,
)
from .path_template import (
    LiteralSegment,
    PathTemplate,
    RenderedParameter,
    VariableSegment,
    parse_path_template,
)

__all__ = [
    "WILDCARD_BODY",
    "ClassifiedBinding",
    "LiteralSegment",
    "MethodBinding",
    "Parameter",
    "ParameterLocation",
    "PathTemplate",
    "RenderedParameter",
    "VariableSegment",
    "classify",
    "extract",
    "parse_path_template",
    "resolve_response_field",
]
