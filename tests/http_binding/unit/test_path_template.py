"""Path template parsing and rendering tests."""

from __future__ import annotations

import pytest
from proto_openapi.configuration import FieldNaming
from proto_openapi.errors import InvalidTemplateError
from proto_openapi.http_binding import (
    LiteralSegment,
    RenderedParameter,
    VariableSegment,
    parse_path_template,
)

METHOD = "library.v1.LibraryService.GetBook"


def test_parses_literals_and_variables_left_to_right() -> None:
    template = parse_path_template("/v1/{parent=shelves/*}/books:search", METHOD)

    assert template.segments == (
        LiteralSegment("/v1/"),
        VariableSegment("parent", "shelves/*"),
        LiteralSegment("/books:search"),
    )
    assert [variable.field_path for variable in template.variables] == ["parent"]


def test_named_pattern_expands_one_parameter_per_collection() -> None:
    template = parse_path_template("/v1/{name=shelves/*/books/*}", METHOD)

    path, parameters = template.render(FieldNaming.JSON)

    assert path == "/v1/shelves/{shelf}/books/{book}"
    assert parameters == (
        RenderedParameter("shelf", "name", "shelves"),
        RenderedParameter("book", "name", "books"),
    )


def test_plain_variable_uses_formatted_field_path() -> None:
    template = parse_path_template("/v1/shelves/{shelf_id}/books/{book.book_id}", METHOD)

    json_path, json_parameters = template.render(FieldNaming.JSON)
    proto_path, _ = template.render(FieldNaming.PROTO)

    assert json_path == "/v1/shelves/{shelfId}/books/{book.bookId}"
    assert [parameter.name for parameter in json_parameters] == ["shelfId", "book.bookId"]
    assert proto_path == "/v1/shelves/{shelf_id}/books/{book.book_id}"


def test_remainder_wildcard_keeps_field_name() -> None:
    template = parse_path_template("/v1/files/{path=**}", METHOD)

    path, parameters = template.render(FieldNaming.JSON)

    assert path == "/v1/files/{path}"
    assert parameters == (RenderedParameter("path", "path"),)
    assert template.variables[0].captures_remainder


@pytest.mark.parametrize(
    ("template", "message"),
    [
        ("v1/shelves", "must start with '/'"),
        ("/v1/{name", "unbalanced '{'"),
        ("/v1/name}", "unbalanced '}'"),
        ("/v1/{a{b}}", "unbalanced '{'"),
        ("/v1/{}", "invalid path variable"),
        ("/v1/{9name}", "invalid path variable"),
        ("/v1/{name=}", "empty pattern"),
    ],
)
def test_malformed_templates_are_rejected(template: str, message: str) -> None:
    with pytest.raises(InvalidTemplateError, match=message) as exc_info:
        parse_path_template(template, METHOD)

    assert exc_info.value.method == METHOD
