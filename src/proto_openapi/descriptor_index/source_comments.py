"""Leading-comment lookup over `source_code_info` locations."""

from __future__ import annotations

import re
from collections.abc import Mapping

from google.protobuf import descriptor_pb2

# Field numbers inside FileDescriptorProto / DescriptorProto / ServiceDescriptorProto.
MESSAGE_TYPE_TAG = 4
ENUM_TYPE_TAG = 5
SERVICE_TAG = 6
FIELD_TAG = 2
NESTED_TYPE_TAG = 3
NESTED_ENUM_TAG = 4
METHOD_TAG = 2

_LINTER_SECTION = re.compile(r"\(--.*?--\)", re.DOTALL)

CommentPath = tuple[int, ...]


def collect_leading_comments(
    file_proto: descriptor_pb2.FileDescriptorProto,
) -> Mapping[CommentPath, str]:
    """Return cleaned leading comments keyed by descriptor location path."""
    comments: dict[CommentPath, str] = {}
    for location in file_proto.source_code_info.location:
        if not location.leading_comments:
            continue
        cleaned = clean_comment(location.leading_comments)
        if cleaned:
            comments[tuple(location.path)] = cleaned
    return comments


def clean_comment(raw: str) -> str:
    """Strip linter sections and per-line indentation from a proto comment."""
    without_linter = _LINTER_SECTION.sub("", raw)
    lines = [line[1:] if line.startswith(" ") else line for line in without_linter.split("\n")]
    return "\n".join(lines).strip()
