"""Generation option entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldNaming(str, Enum):
    JSON = "json"
    PROTO = "proto"


class EnumRendering(str, Enum):
    INTEGER = "integer"
    STRING = "string"


class OutputMode(str, Enum):
    MERGED = "merged"
    SOURCE_RELATIVE = "source_relative"


@dataclass(frozen=True)
class GenerationOptions:  # pylint: disable=too-many-instance-attributes
    """Normalized options for one generation run."""

    version: str = "0.0.1"
    title: str | None = None
    description: str | None = None
    naming: FieldNaming = FieldNaming.JSON
    fq_schema_naming: bool = False
    enum_type: EnumRendering = EnumRendering.INTEGER
    depth: int = 2
    default_response: bool = True
    wildcard_body_dedup: bool = False
    output_mode: OutputMode = OutputMode.MERGED
