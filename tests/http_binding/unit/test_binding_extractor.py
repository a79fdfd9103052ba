"""HTTP binding extraction and classification tests."""

from __future__ import annotations

from typing import Any

import pytest
from proto_builders import (
    INT32,
    field,
    http_rule,
    item_file,
    library_file,
    map_entry,
    message,
    message_field,
    node_file,
    proto_file,
    rpc,
    service,
)
from proto_openapi.configuration import GenerationOptions
from proto_openapi.descriptor_index import DescriptorIndex, MethodDescriptor
from proto_openapi.diagnostics import DiagnosticLog, Severity
from proto_openapi.errors import InvalidTemplateError
from proto_openapi.http_binding import ParameterLocation, classify, extract
from proto_openapi.schema_building import BuildContext, SchemaBuilder, to_openapi


def _setup(file_proto, **options: Any) -> tuple[DescriptorIndex, SchemaBuilder]:
    index = DescriptorIndex.from_files([file_proto])
    builder = SchemaBuilder(BuildContext(index=index, options=GenerationOptions(**options)))
    return index, builder


def _method(index: DescriptorIndex, name: str) -> MethodDescriptor:
    for method in index.services[0].methods:
        if method.name == name:
            return method
    raise AssertionError(f"no method {name}")


def _classify(index: DescriptorIndex, builder: SchemaBuilder, name: str, position: int = 0):
    method = _method(index, name)
    binding = extract(method)[position]
    return classify(binding, index.find_message(method.input_type), builder)


def _query_names(classified) -> list[str]:
    return [parameter.name for parameter in classified.query_parameters]


def test_method_without_annotation_has_no_bindings() -> None:
    index, _ = _setup(library_file())

    assert extract(_method(index, "StreamBooks")) == []


def test_additional_bindings_follow_primary_in_order() -> None:
    file_proto = proto_file(
        "archive.proto",
        "archive",
        messages=[message("GetRequest", field("name", 1)), message("Record")],
        services=[
            service(
                "Archive",
                rpc(
                    "Get",
                    ".archive.GetRequest",
                    ".archive.Record",
                    http_rule(
                        "get",
                        "/v1/{name=records/*}",
                        additional=[
                            http_rule("get", "/v1/{name=archives/*/records/*}"),
                            http_rule("head", "/v1/{name=records/*}"),
                        ],
                    ),
                ),
            )
        ],
    )
    index, _ = _setup(file_proto)

    bindings = extract(_method(index, "Get"))

    assert [(binding.verb, binding.template.raw, binding.index) for binding in bindings] == [
        ("get", "/v1/{name=records/*}", 0),
        ("get", "/v1/{name=archives/*/records/*}", 1),
        ("head", "/v1/{name=records/*}", 2),
    ]


def test_unsupported_custom_verb_is_skipped_with_warning() -> None:
    file_proto = proto_file(
        "locks.proto",
        "locks",
        messages=[message("Lock", field("name", 1))],
        services=[
            service(
                "Locks",
                rpc(
                    "Acquire",
                    ".locks.Lock",
                    ".locks.Lock",
                    http_rule(
                        "post",
                        "/v1/locks",
                        body="*",
                        additional=[http_rule("LOCK", "/v1/locks/{name}")],
                    ),
                ),
            )
        ],
    )
    index, _ = _setup(file_proto)
    diagnostics = DiagnosticLog()

    bindings = extract(_method(index, "Acquire"), diagnostics)

    assert [binding.verb for binding in bindings] == ["post"]
    [diagnostic] = diagnostics.entries
    assert diagnostic.severity == Severity.WARNING
    assert diagnostic.subject == "locks.Locks.Acquire"


def test_named_pattern_produces_required_string_path_parameters() -> None:
    index, builder = _setup(library_file())

    classified = _classify(index, builder, "GetBook")

    assert classified.path == "/v1/shelves/{shelf}/books/{book}"
    assert [
        (parameter.name, parameter.location, parameter.required, parameter.description)
        for parameter in classified.path_parameters
    ] == [
        ("shelf", ParameterLocation.PATH, True, "The shelf id."),
        ("book", ParameterLocation.PATH, True, "The book id."),
    ]
    assert classified.query_parameters == ()
    assert classified.path_bound_fields == frozenset({"name"})


def test_unbound_scalar_fields_become_query_parameters() -> None:
    index, builder = _setup(library_file())

    classified = _classify(index, builder, "ListBooks")

    assert _query_names(classified) == ["pageSize", "pageToken"]
    assert to_openapi(classified.query_parameters[0].schema) == {
        "type": "integer",
        "format": "int32",
    }


def test_named_body_field_is_excluded_from_query() -> None:
    index, builder = _setup(library_file())

    classified = _classify(index, builder, "CreateBook")

    assert classified.body_field.name == "book"
    assert classified.query_parameters == ()


def test_wildcard_body_leaves_no_query_parameters() -> None:
    index, builder = _setup(item_file())

    classified = _classify(index, builder, "UpdateItem")

    assert classified.binding.has_wildcard_body
    assert classified.path == "/v1/items/{id}"
    assert to_openapi(classified.path_parameters[0].schema) == {"type": "string"}
    assert classified.query_parameters == ()


def test_query_flattening_depth_two_stops_after_one_nesting_level() -> None:
    index, builder = _setup(node_file(), depth=2)

    classified = _classify(index, builder, "FindNode")

    assert _query_names(classified) == ["name", "child.name"]


def test_query_flattening_depth_three_adds_exactly_one_level() -> None:
    index, builder = _setup(node_file(), depth=3)

    classified = _classify(index, builder, "FindNode")

    assert _query_names(classified) == ["name", "child.name", "child.child.name"]


def test_maps_and_repeated_messages_are_omitted_from_query_with_warning() -> None:
    file_proto = proto_file(
        "search.proto",
        "search",
        messages=[
            message(
                "SearchRequest",
                field("query", 1),
                message_field("labels", 2, ".search.SearchRequest.LabelsEntry", repeated=True),
                message_field("filters", 3, ".search.Filter", repeated=True),
                message_field("since", 4, ".google.protobuf.Timestamp"),
                field("limits", 5, INT32, repeated=True),
                nested=[map_entry("LabelsEntry", field("value", 2))],
            ),
            message("Filter", field("expression", 1)),
            message("SearchResponse"),
        ],
        services=[
            service(
                "Search",
                rpc(
                    "Find",
                    ".search.SearchRequest",
                    ".search.SearchResponse",
                    http_rule("get", "/v1/search"),
                ),
            )
        ],
    )
    index, builder = _setup(file_proto)

    classified = _classify(index, builder, "Find")

    assert _query_names(classified) == ["query", "since", "limits"]
    assert to_openapi(classified.query_parameters[1].schema) == {
        "type": "string",
        "format": "date-time",
    }
    assert to_openapi(classified.query_parameters[2].schema) == {
        "type": "array",
        "items": {"type": "integer", "format": "int32"},
    }
    omitted = [entry.message for entry in builder.context.diagnostics.entries]
    assert any("'labels'" in text for text in omitted)
    assert any("'filters'" in text for text in omitted)


def test_nested_path_variable_is_resolved_through_message_fields() -> None:
    file_proto = proto_file(
        "shelves.proto",
        "shelves",
        messages=[
            message("Shelf", field("shelf_id", 1), field("theme", 2)),
            message("UpdateShelfRequest", message_field("shelf", 1, ".shelves.Shelf")),
        ],
        services=[
            service(
                "Shelves",
                rpc(
                    "UpdateShelf",
                    ".shelves.UpdateShelfRequest",
                    ".shelves.Shelf",
                    http_rule("patch", "/v1/shelves/{shelf.shelf_id}", body="shelf"),
                ),
            )
        ],
    )
    index, builder = _setup(file_proto)

    classified = _classify(index, builder, "UpdateShelf")

    assert classified.path == "/v1/shelves/{shelf.shelfId}"
    assert classified.path_parameters[0].name == "shelf.shelfId"
    assert classified.top_level_path_fields == frozenset()


def test_unknown_path_variable_is_an_invalid_template() -> None:
    file_proto = proto_file(
        "broken.proto",
        "broken",
        messages=[message("Request", field("name", 1))],
        services=[
            service(
                "Broken",
                rpc(
                    "Get",
                    ".broken.Request",
                    ".broken.Request",
                    http_rule("get", "/v1/{missing}"),
                ),
            )
        ],
    )
    index, builder = _setup(file_proto)

    with pytest.raises(InvalidTemplateError, match="missing"):
        _classify(index, builder, "Get")


def test_unknown_body_selector_is_an_invalid_template() -> None:
    file_proto = proto_file(
        "broken.proto",
        "broken",
        messages=[message("Request", field("name", 1))],
        services=[
            service(
                "Broken",
                rpc(
                    "Create",
                    ".broken.Request",
                    ".broken.Request",
                    http_rule("post", "/v1/requests", body="payload"),
                ),
            )
        ],
    )
    index, builder = _setup(file_proto)

    with pytest.raises(InvalidTemplateError, match="body selector 'payload'"):
        _classify(index, builder, "Create")
