"""Error taxonomy shared by the generation stages."""

from __future__ import annotations


class ProtoOpenAPIError(Exception):
    """Base class for generation failures."""


class UnresolvedReferenceError(ProtoOpenAPIError):
    """Raised when a method or field names a type missing from the descriptor closure."""

    def __init__(self, type_name: str, owner: str) -> None:
        super().__init__(f"{owner}: unresolved type reference '{type_name}'")
        self.type_name = type_name
        self.owner = owner


class InvalidTemplateError(ProtoOpenAPIError):
    """Raised for malformed path templates and selectors naming unknown fields."""

    def __init__(self, method: str, detail: str) -> None:
        super().__init__(f"{method}: {detail}")
        self.method = method
        self.detail = detail


class UnsupportedFieldError(ProtoOpenAPIError):
    """Raised when a field type has no OpenAPI representation."""

    def __init__(self, type_name: str, owner: str) -> None:
        super().__init__(f"{owner}: unsupported field type '{type_name}'")
        self.type_name = type_name
        self.owner = owner
