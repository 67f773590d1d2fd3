"""Route table stories: the root route, the 404 fallback, HEAD handling."""

from __future__ import annotations

import pytest

from kell_app.domain.behaviors import CANONICAL_GREETING
from kell_app.domain.routes import (
    DEFAULT_ROUTES,
    TEXT_PLAIN,
    Response,
    Route,
    RouteTable,
    build_route_table,
    not_found,
    request_path,
)


@pytest.fixture
def table() -> RouteTable:
    return build_route_table()


@pytest.mark.os_agnostic
def test_default_table_holds_only_the_root_route(table: RouteTable) -> None:
    assert len(table) == 1
    assert [(route.method, route.path) for route in table] == [("GET", "/")]


@pytest.mark.os_agnostic
def test_get_root_returns_the_greeting(table: RouteTable) -> None:
    response = table.resolve("GET", "/")

    assert response == Response(status=200, body=CANONICAL_GREETING, content_type=TEXT_PLAIN)


@pytest.mark.os_agnostic
def test_method_is_matched_case_insensitively(table: RouteTable) -> None:
    assert table.resolve("get", "/").status == 200


@pytest.mark.os_agnostic
def test_query_string_is_ignored_for_matching(table: RouteTable) -> None:
    assert table.resolve("GET", "/?who=kell").body == CANONICAL_GREETING


@pytest.mark.os_agnostic
def test_head_root_reuses_the_get_response(table: RouteTable) -> None:
    assert table.resolve("HEAD", "/") == table.resolve("GET", "/")


@pytest.mark.os_agnostic
def test_unknown_path_returns_404(table: RouteTable) -> None:
    response = table.resolve("GET", "/nonexistent")

    assert response.status == 404
    assert response.body == "Cannot GET /nonexistent"
    assert response.content_type == TEXT_PLAIN


@pytest.mark.os_agnostic
def test_post_root_returns_404_not_the_greeting(table: RouteTable) -> None:
    response = table.resolve("POST", "/")

    assert response.status == 404
    assert response.body == "Cannot POST /"


@pytest.mark.os_agnostic
def test_head_on_unknown_path_returns_404(table: RouteTable) -> None:
    assert table.resolve("HEAD", "/missing").status == 404


@pytest.mark.os_agnostic
def test_similar_paths_do_not_match_root(table: RouteTable) -> None:
    assert table.resolve("GET", "/index.html").status == 404
    assert table.resolve("GET", "//").status == 404


@pytest.mark.os_agnostic
def test_duplicate_routes_are_rejected() -> None:
    route = Route(method="GET", path="/", status=200, body="a")
    duplicate = Route(method="get", path="/", status=200, body="b")

    with pytest.raises(ValueError, match="Duplicate route: GET /"):
        RouteTable([route, duplicate])


@pytest.mark.os_agnostic
def test_custom_table_serves_its_own_routes() -> None:
    table = RouteTable([Route(method="GET", path="/health", status=204, body="")])

    assert table.resolve("GET", "/health").status == 204
    assert table.resolve("GET", "/").status == 404


@pytest.mark.os_agnostic
def test_routes_property_matches_default_routes(table: RouteTable) -> None:
    assert table.routes == DEFAULT_ROUTES


@pytest.mark.os_agnostic
def test_not_found_echoes_method_and_path() -> None:
    assert not_found("DELETE", "/a/b").body == "Cannot DELETE /a/b"


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("/", "/"),
        ("/?a=1", "/"),
        ("/path#frag", "/path"),
        ("", "/"),
        ("/a/b?c", "/a/b"),
        ("//double", "//double"),
    ],
)
def test_request_path_strips_query_and_fragment(target: str, expected: str) -> None:
    assert request_path(target) == expected


@pytest.mark.os_agnostic
def test_encoded_body_is_utf8() -> None:
    assert Response(status=200, body="Grüße").encoded_body() == "Grüße".encode()


@pytest.mark.os_agnostic
def test_options_root_lists_get_and_head(table: RouteTable) -> None:
    response = table.resolve("OPTIONS", "/")

    assert response.status == 200
    assert response.body == "GET,HEAD"
    assert response.headers == (("Allow", "GET,HEAD"),)


@pytest.mark.os_agnostic
def test_options_on_unknown_path_returns_404(table: RouteTable) -> None:
    assert table.resolve("OPTIONS", "/missing") == not_found("OPTIONS", "/missing")


@pytest.mark.os_agnostic
def test_explicit_options_route_wins_over_the_allow_listing() -> None:
    table = RouteTable(
        [
            Route(method="GET", path="/", status=200, body="hi"),
            Route(method="OPTIONS", path="/", status=204, body=""),
        ]
    )

    assert table.resolve("OPTIONS", "/").status == 204


@pytest.mark.os_agnostic
def test_allowed_methods_keep_registration_order() -> None:
    table = RouteTable(
        [
            Route(method="POST", path="/items", status=201, body=""),
            Route(method="GET", path="/items", status=200, body="[]"),
        ]
    )

    assert table.allowed_methods("/items") == ("POST", "GET", "HEAD")


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "target",
    ["http://localhost:8000/", "http://localhost:8000", "http://example.com/?q=1#top"],
)
def test_absolute_form_targets_resolve_by_path(table: RouteTable, target: str) -> None:
    assert table.resolve("GET", target).body == CANONICAL_GREETING


@pytest.mark.os_agnostic
def test_absolute_form_keeps_the_path_in_404_bodies(table: RouteTable) -> None:
    assert table.resolve("GET", "http://localhost:8000/missing").body == "Cannot GET /missing"
