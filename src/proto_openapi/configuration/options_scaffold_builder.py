"""Options file scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_OPTIONS_FILENAME = "openapi-options.yaml"

_OPTIONS_SCAFFOLD_TEMPLATE = """# Generation options for proto-openapi.
# Every key is optional; the values below are the defaults.
# The same keys are accepted by protoc-gen-openapi as --openapi_opt=key=value.

# Document info. title and description default to the sole service, when there is one.
version: "0.0.1"
# title: "Library API"
# description: "Manages shelves and books."

# Property naming: json (lowerCamelCase) or proto (declared names).
naming: json

# Qualify schema names with their package to keep same-named types apart.
fq_schema_naming: false

# Enum rendering: integer (format enum) or string (enum member names).
enum_type: integer

# Nesting allowed for recursive messages when flattening query parameters.
depth: 2

# Add a default error response referencing the shared Status schema.
default_response: true

# Emit <Name>_Body request schemas without path-bound fields for body "*".
wildcard_body_dedup: false

# merged (one openapi.yaml) or source_relative (one document per proto file).
output_mode: merged
"""


def build_options_scaffold() -> str:
    """Build a YAML options file listing every option with its default."""
    return _OPTIONS_SCAFFOLD_TEMPLATE


def write_options_scaffold(output_path: Path | str) -> Path:
    """Write the options scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Options file already exists: {destination.resolve()}")
    destination.write_text(build_options_scaffold(), encoding="utf-8")
    return destination.resolve()
