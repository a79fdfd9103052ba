"""Schema registry and shared schema tests."""

from __future__ import annotations

from proto_openapi.schema_building import (
    ExpansionChain,
    ObjectSchema,
    ReferenceSchema,
    ScalarSchema,
    SchemaRegistry,
    register_status,
    to_openapi,
)


def test_reserved_entry_renders_as_empty_object_until_filled() -> None:
    registry = SchemaRegistry()

    assert registry.reserve("Book", "pkg.Book") is None
    assert dict(registry.items()) == {"Book": ObjectSchema()}

    registry.fill("Book", "pkg.Book", ScalarSchema("string"))

    assert registry.get("Book") == ScalarSchema("string")


def test_reserve_by_another_identity_replaces_entry_in_place() -> None:
    registry = SchemaRegistry()
    registry.register("Book", "pkg1.Book", ScalarSchema("string"))
    registry.register("Shelf", "pkg1.Shelf", ScalarSchema("string"))

    replaced = registry.reserve("Book", "pkg2.Book")

    assert replaced == "pkg1.Book"
    assert registry.identity_of("Book") == "pkg2.Book"
    assert registry.get("Book") is None
    assert [key for key, _ in registry.items()] == ["Book", "Shelf"]


def test_fill_ignores_identity_that_lost_the_key() -> None:
    registry = SchemaRegistry()
    registry.reserve("Book", "pkg1.Book")
    registry.reserve("Book", "pkg2.Book")

    registry.fill("Book", "pkg1.Book", ScalarSchema("integer"))

    assert registry.get("Book") is None


def test_register_is_insert_once_per_identity() -> None:
    registry = SchemaRegistry()
    registry.register("Book", "pkg.Book", ScalarSchema("string"))
    registry.register("Book", "pkg.Book", ScalarSchema("integer"))

    assert registry.get("Book") == ScalarSchema("string")
    assert len(registry) == 1


def test_status_schema_registers_any_dependency() -> None:
    registry = SchemaRegistry()

    reference = register_status(registry, fully_qualified=False)
    register_status(registry, fully_qualified=False)

    assert reference == ReferenceSchema("Status")
    assert [key for key, _ in registry.items()] == ["Status", "GoogleProtobufAny"]
    status = to_openapi(registry.get("Status"))
    assert list(status["properties"]) == ["code", "message", "details"]
    assert status["properties"]["details"]["items"] == {
        "$ref": "#/components/schemas/GoogleProtobufAny"
    }


def test_status_schema_uses_qualified_keys_when_requested() -> None:
    registry = SchemaRegistry()

    register_status(registry, fully_qualified=True)

    assert [key for key, _ in registry.items()] == ["google.rpc.Status", "google.protobuf.Any"]


def test_described_reference_renders_through_all_of() -> None:
    reference = ReferenceSchema("Book", description="The book to create.")

    assert to_openapi(reference) == {
        "allOf": [{"$ref": "#/components/schemas/Book"}],
        "description": "The book to create.",
    }


def test_external_reference_prefixes_document_path() -> None:
    reference = ReferenceSchema("Thing", document="common.openapi.yaml")

    assert to_openapi(reference) == {"$ref": "common.openapi.yaml#/components/schemas/Thing"}


def test_expansion_chain_is_immutable_and_counts_occurrences() -> None:
    root = ExpansionChain().push("tree.Node")
    deeper = root.push("tree.Node")

    assert len(root) == 1
    assert deeper.occurrences("tree.Node") == 2
    assert root.can_enter("tree.Node", depth=2)
    assert not deeper.can_enter("tree.Node", depth=2)
    assert "tree.Leaf" not in deeper
