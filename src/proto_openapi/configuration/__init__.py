"""Configuration domain exports."""

from .generation_options import EnumRendering, FieldNaming, GenerationOptions, OutputMode
from .loader import (
    KNOWN_OPTION_KEYS,
    ConfigurationError,
    build_options,
    load_options_file,
    parse_plugin_parameter,
    read_options_mapping,
    split_plugin_parameter,
)
from .options_scaffold_builder import (
    DEFAULT_OPTIONS_FILENAME,
    build_options_scaffold,
    write_options_scaffold,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_OPTIONS_FILENAME",
    "EnumRendering",
    "FieldNaming",
    "GenerationOptions",
    "KNOWN_OPTION_KEYS",
    "OutputMode",
    "build_options",
    "build_options_scaffold",
    "load_options_file",
    "parse_plugin_parameter",
    "read_options_mapping",
    "split_plugin_parameter",
    "write_options_scaffold",
]
