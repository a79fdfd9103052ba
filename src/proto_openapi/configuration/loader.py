"""Generation option loading and validation."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from .generation_options import EnumRendering, FieldNaming, GenerationOptions, OutputMode

_EnumT = TypeVar("_EnumT", bound=Enum)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})

KNOWN_OPTION_KEYS: tuple[str, ...] = (
    "version",
    "title",
    "description",
    "naming",
    "fq_schema_naming",
    "enum_type",
    "depth",
    "default_response",
    "wildcard_body_dedup",
    "output_mode",
)


class ConfigurationError(Exception):
    """Raised when generation options are invalid."""


def parse_plugin_parameter(parameter: str) -> GenerationOptions:
    """Parse a protoc plugin parameter string such as `naming=proto,depth=3`."""
    return build_options(split_plugin_parameter(parameter))


def split_plugin_parameter(parameter: str) -> dict[str, str]:
    """Split `key=value` pairs separated by commas without validating them."""
    values: dict[str, str] = {}
    for item in parameter.split(","):
        stripped = item.strip()
        if not stripped:
            continue
        key, separator, value = stripped.partition("=")
        if not separator:
            raise ConfigurationError(f"Option '{stripped}' must be written as key=value.")
        values[key.strip()] = value.strip()
    return values


def load_options_file(options_path: Path | str) -> GenerationOptions:
    """Load and validate a YAML options file."""
    return build_options(read_options_mapping(options_path))


def read_options_mapping(options_path: Path | str) -> dict[str, Any]:
    """Read a YAML options file into a raw mapping."""
    path = Path(options_path)
    if not path.exists():
        raise ConfigurationError(f"Options file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse options file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Options root must be a mapping.")
    return dict(parsed)


def build_options(values: Mapping[str, Any]) -> GenerationOptions:
    """Validate raw option values and apply defaults."""
    unknown = sorted(str(key) for key in values if key not in KNOWN_OPTION_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

    defaults = GenerationOptions()
    return GenerationOptions(
        version=_require_non_empty_string(values.get("version", defaults.version), "version"),
        title=_optional_string(values.get("title"), "title"),
        description=_optional_string(values.get("description"), "description"),
        naming=_require_choice(values.get("naming", defaults.naming), FieldNaming, "naming"),
        fq_schema_naming=_require_bool(
            values.get("fq_schema_naming", defaults.fq_schema_naming), "fq_schema_naming"
        ),
        enum_type=_require_choice(
            values.get("enum_type", defaults.enum_type), EnumRendering, "enum_type"
        ),
        depth=_require_positive_int(values.get("depth", defaults.depth), "depth"),
        default_response=_require_bool(
            values.get("default_response", defaults.default_response), "default_response"
        ),
        wildcard_body_dedup=_require_bool(
            values.get("wildcard_body_dedup", defaults.wildcard_body_dedup),
            "wildcard_body_dedup",
        ),
        output_mode=_require_choice(
            values.get("output_mode", defaults.output_mode), OutputMode, "output_mode"
        ),
    )


def _require_choice(value: Any, choices: type[_EnumT], field_name: str) -> _EnumT:
    if isinstance(value, choices):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    try:
        return choices(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(str(choice.value) for choice in choices)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"{field_name} must be a boolean.")


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise ConfigurationError(f"{field_name} must be an integer.") from exc
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
