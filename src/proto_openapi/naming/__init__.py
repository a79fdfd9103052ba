"""Naming policy exports."""

from .naming_policies import field_name, format_field_path, schema_name, singular, to_lower_camel

__all__ = ["field_name", "format_field_path", "schema_name", "singular", "to_lower_camel"]
