"""protoc plugin framing: CodeGeneratorRequest on stdin, CodeGeneratorResponse on stdout."""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from proto_openapi.configuration import ConfigurationError, parse_plugin_parameter
from proto_openapi.generation_run import GenerationError, GenerationRequest, generate

logger = logging.getLogger(__name__)

PLUGIN_NAME = "protoc-gen-openapi"


def handle_request(
    request: plugin_pb2.CodeGeneratorRequest,
) -> plugin_pb2.CodeGeneratorResponse:
    """Run one generation pass; fatal errors are returned in the response error field."""
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    try:
        options = parse_plugin_parameter(request.parameter)
        result = generate(
            GenerationRequest(
                file_protos=list(request.proto_file),
                files_to_generate=list(request.file_to_generate),
                options=options,
            )
        )
    except (ConfigurationError, GenerationError) as exc:
        response.error = str(exc)
        return response

    for generated in result.files:
        response.file.add(name=generated.path, content=generated.content)
    return response


def main(stdin: BinaryIO | None = None, stdout: BinaryIO | None = None) -> int:
    """Plugin entry point for console_scripts wiring."""
    logging.basicConfig(
        stream=sys.stderr, level=logging.WARNING, format=f"{PLUGIN_NAME}: %(message)s"
    )
    payload = (stdin or sys.stdin.buffer).read()
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(payload)
    except DecodeError as exc:
        logger.error("Invalid CodeGeneratorRequest: %s", exc)
        return 1
    response = handle_request(request)
    output = stdout or sys.stdout.buffer
    output.write(response.SerializeToString())
    output.flush()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
