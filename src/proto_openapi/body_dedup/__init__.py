"""Body dedup exports."""

from .body_variant import BODY_SUFFIX, derive_body_schema, needs_body_variant

__all__ = ["BODY_SUFFIX", "derive_body_schema", "needs_body_variant"]
