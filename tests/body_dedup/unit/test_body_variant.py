"""Wildcard body dedup tests."""

from __future__ import annotations

from proto_builders import field, http_rule, item_file, message, node_file, proto_file, rpc, service
from proto_openapi.body_dedup import derive_body_schema, needs_body_variant
from proto_openapi.configuration import GenerationOptions
from proto_openapi.descriptor_index import DescriptorIndex
from proto_openapi.http_binding import classify, extract
from proto_openapi.schema_building import (
    BuildContext,
    ReferenceSchema,
    SchemaBuilder,
    message_type_ref,
    to_openapi,
)


def _setup(file_proto):
    index = DescriptorIndex.from_files([file_proto])
    builder = SchemaBuilder(BuildContext(index=index, options=GenerationOptions()))
    method = index.services[0].methods[0]
    request = index.find_message(method.input_type)
    classified = classify(extract(method)[0], request, builder)
    return builder, request, classified


def test_body_variant_needed_only_when_enabled_and_path_bound() -> None:
    _, request, classified = _setup(item_file())

    assert needs_body_variant(classified, request, enabled=True)
    assert not needs_body_variant(classified, request, enabled=False)


def test_body_variant_not_needed_without_path_bound_fields() -> None:
    file_proto = proto_file(
        "notes.proto",
        "notes",
        messages=[message("Note", field("text", 1))],
        services=[
            service(
                "Notes",
                rpc(
                    "Create",
                    ".notes.Note",
                    ".notes.Note",
                    http_rule("post", "/v1/notes", body="*"),
                ),
            )
        ],
    )
    _, request, classified = _setup(file_proto)

    assert not needs_body_variant(classified, request, enabled=True)


def test_body_variant_omits_path_bound_fields_and_keeps_original() -> None:
    builder, request, classified = _setup(item_file())
    builder.build(message_type_ref("items.v1.Item"), owner="test")

    reference = derive_body_schema(builder, request, classified.top_level_path_fields)

    registry = builder.context.registry
    assert reference == ReferenceSchema("Item_Body")
    assert list(to_openapi(registry.get("Item_Body"))["properties"]) == ["name", "quantity"]
    assert list(to_openapi(registry.get("Item"))["properties"]) == ["id", "name", "quantity"]


def test_body_variant_is_registered_once() -> None:
    builder, request, classified = _setup(item_file())

    derive_body_schema(builder, request, classified.top_level_path_fields)
    derive_body_schema(builder, request, classified.top_level_path_fields)

    assert [key for key, _ in builder.context.registry.items()] == ["Item_Body"]


def test_body_variant_of_recursive_message_references_original() -> None:
    builder, request, _ = _setup(node_file())

    derive_body_schema(builder, request, {"name"})

    registry = builder.context.registry
    assert to_openapi(registry.get("Node_Body")) == {
        "type": "object",
        "properties": {"child": {"$ref": "#/components/schemas/Node"}},
    }
    assert list(to_openapi(registry.get("Node"))["properties"]) == ["name", "child"]
