"""List the route table.

Contents:
    * :func:`cli_routes` - Print every route the server answers.
"""

from __future__ import annotations

import rich_click as click

from kell_app.domain.routes import TEXT_PLAIN, RouteTable, allowed, build_route_table

from ..context import CLICK_CONTEXT_SETTINGS

_HEADER_ROW = ("METHOD", "PATH", "STATUS", "CONTENT-TYPE", "BODY")
_FALLBACK_ROW = ("*", "*", "404", TEXT_PLAIN, "Cannot <METHOD> <path>")


def _format_rows(rows: list[tuple[str, ...]]) -> list[str]:
    """Left-align every column to its widest cell.

    Example:
        >>> _format_rows([("GET", "/"), ("HEAD", "/x")])
        ['GET   /', 'HEAD  /x']
    """
    widths = [max(len(row[column]) for row in rows) for column in range(len(rows[0]))]
    return ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]


def _table_rows(table: RouteTable) -> list[tuple[str, ...]]:
    """Registered routes, then one OPTIONS row per routed path."""
    rows: list[tuple[str, ...]] = [
        (route.method, route.path, str(route.status), route.content_type, route.body) for route in table
    ]
    registered = {(route.method.upper(), route.path) for route in table}
    for path in dict.fromkeys(route.path for route in table):
        if ("OPTIONS", path) not in registered:
            response = allowed(table.allowed_methods(path))
            rows.append(("OPTIONS", path, str(response.status), response.content_type, response.body))
    return rows


@click.command("routes", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_routes() -> None:
    """Show the routes the server answers; everything else gets 404."""
    rows = [_HEADER_ROW, *_table_rows(build_route_table()), _FALLBACK_ROW]
    for line in _format_rows(rows):
        click.echo(line)


__all__ = ["cli_routes"]
