"""Generate OpenAPI v3 documents from annotated protobuf service descriptors."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = []
