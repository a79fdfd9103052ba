"""HTTP rule path template parsing and rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass

from proto_openapi.configuration.generation_options import FieldNaming
from proto_openapi.errors import InvalidTemplateError
from proto_openapi.naming.naming_policies import format_field_path, singular

_FIELD_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_WILDCARDS = ("*", "**")


@dataclass(frozen=True)
class LiteralSegment:
    text: str


@dataclass(frozen=True)
class VariableSegment:
    """`{field.path}` or `{field.path=pattern}` capture."""

    field_path: str
    pattern: str | None = None

    @property
    def captures_remainder(self) -> bool:
        return self.pattern is not None and self.pattern.endswith("**")


TemplateSegment = LiteralSegment | VariableSegment


@dataclass(frozen=True)
class RenderedParameter:
    """Path parameter produced while rendering a template."""

    name: str
    field_path: str
    collection: str | None = None


@dataclass(frozen=True)
class PathTemplate:
    raw: str
    segments: tuple[TemplateSegment, ...]

    @property
    def variables(self) -> tuple[VariableSegment, ...]:
        return tuple(segment for segment in self.segments if isinstance(segment, VariableSegment))

    def render(self, naming: FieldNaming) -> tuple[str, tuple[RenderedParameter, ...]]:
        """Return the OpenAPI path and its parameters in template order.

        A variable with a resource pattern such as `shelves/*/books/*` expands to
        `shelves/{shelf}/books/{book}`; each wildcard becomes a parameter named
        after the collection before it.
        """
        parts: list[str] = []
        parameters: list[RenderedParameter] = []
        for segment in self.segments:
            if isinstance(segment, LiteralSegment):
                parts.append(segment.text)
                continue
            formatted = format_field_path(segment.field_path, naming)
            if segment.pattern is None or segment.pattern in _WILDCARDS:
                parts.append(f"{{{formatted}}}")
                parameters.append(RenderedParameter(formatted, segment.field_path))
                continue
            pattern_parts = segment.pattern.split("/")
            for position, part in enumerate(pattern_parts):
                if part not in _WILDCARDS:
                    continue
                previous = pattern_parts[position - 1] if position > 0 else None
                if previous is None or previous in _WILDCARDS:
                    name = formatted
                    collection = None
                else:
                    name = singular(previous)
                    collection = previous
                pattern_parts[position] = f"{{{name}}}"
                parameters.append(RenderedParameter(name, segment.field_path, collection))
            parts.append("/".join(pattern_parts))
        return "".join(parts), tuple(parameters)


def parse_path_template(template: str, method: str) -> PathTemplate:
    """Split a template into literal and variable segments, left to right."""
    if not template.startswith("/"):
        raise InvalidTemplateError(method, f"path template '{template}' must start with '/'")
    segments: list[TemplateSegment] = []
    literal: list[str] = []
    position = 0
    while position < len(template):
        character = template[position]
        if character == "}":
            raise InvalidTemplateError(method, f"unbalanced '}}' in path template '{template}'")
        if character != "{":
            literal.append(character)
            position += 1
            continue
        closing = template.find("}", position)
        nested = template.find("{", position + 1)
        if closing == -1 or (nested != -1 and nested < closing):
            raise InvalidTemplateError(method, f"unbalanced '{{' in path template '{template}'")
        if literal:
            segments.append(LiteralSegment("".join(literal)))
            literal = []
        segments.append(_parse_variable(template[position + 1 : closing], template, method))
        position = closing + 1
    if literal:
        segments.append(LiteralSegment("".join(literal)))
    return PathTemplate(raw=template, segments=tuple(segments))


def _parse_variable(body: str, template: str, method: str) -> VariableSegment:
    field_path, separator, pattern = body.partition("=")
    field_path = field_path.strip()
    if not _FIELD_PATH.match(field_path):
        raise InvalidTemplateError(
            method, f"invalid path variable '{{{body}}}' in path template '{template}'"
        )
    if separator and not pattern.strip():
        raise InvalidTemplateError(
            method, f"empty pattern for path variable '{field_path}' in '{template}'"
        )
    return VariableSegment(field_path=field_path, pattern=pattern.strip() if separator else None)
