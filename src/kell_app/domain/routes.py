"""Explicit route table and default-response policy.

Every request the responder accepts is resolved here, so the observable
behaviour does not depend on any HTTP library's implicit routing.

Contents:
    * :class:`Response` - Immutable response value.
    * :class:`Route` - A (method, path) pair bound to a fixed response.
    * :class:`RouteTable` - Exact-match lookup with OPTIONS and 404 fallbacks.
    * :data:`DEFAULT_ROUTES` - The single root route.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlsplit

from .behaviors import build_greeting

TEXT_PLAIN = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """A fully materialized HTTP response.

    ``headers`` holds extra (name, value) pairs beyond Content-Type and
    Content-Length.

    Example:
        >>> Response(status=200, body="ok").encoded_body()
        b'ok'
    """

    status: int
    body: str = ""
    content_type: str = TEXT_PLAIN
    headers: tuple[tuple[str, str], ...] = ()

    def encoded_body(self) -> bytes:
        """Return the body as UTF-8 bytes."""
        return self.body.encode("utf-8")


@dataclass(frozen=True, slots=True)
class Route:
    """A (method, path) pair mapped to a static response."""

    method: str
    path: str
    status: int
    body: str
    content_type: str = TEXT_PLAIN

    def response(self) -> Response:
        return Response(status=self.status, body=self.body, content_type=self.content_type)


def request_path(target: str) -> str:
    """Reduce a request target to the path used for matching.

    Query string and fragment are dropped. Absolute-form targets
    (``http://host:port/path``) lose their scheme and authority.

    Example:
        >>> request_path("/?name=kell")
        '/'
        >>> request_path("")
        '/'
        >>> request_path("//double")
        '//double'
        >>> request_path("http://localhost:8000/?x=1")
        '/'
    """
    if target.startswith("/"):
        path = target.split("?", 1)[0].split("#", 1)[0]
    else:
        path = urlsplit(target).path
    return path or "/"


def not_found(method: str, path: str) -> Response:
    """Build the fallback response for requests no route claims.

    Example:
        >>> not_found("POST", "/").body
        'Cannot POST /'
    """
    return Response(status=404, body=f"Cannot {method} {path}")


def allowed(methods: Iterable[str]) -> Response:
    """Answer an ``OPTIONS`` request with the methods a path accepts.

    Example:
        >>> allowed(["GET", "HEAD"]).headers
        (('Allow', 'GET,HEAD'),)
    """
    allow = ",".join(methods)
    return Response(status=200, body=allow, headers=(("Allow", allow),))


class RouteTable:
    """Exact-match route lookup.

    ``HEAD`` is answered by the matching ``GET`` route; the transport drops
    the body. ``OPTIONS`` on a routed path lists that path's methods.
    Anything else unmatched, including a known path with an unknown method,
    resolves to :func:`not_found`.

    Example:
        >>> table = RouteTable(DEFAULT_ROUTES)
        >>> table.resolve("GET", "/").status
        200
        >>> table.resolve("GET", "/nonexistent").status
        404
        >>> table.resolve("POST", "/").status
        404
        >>> table.resolve("OPTIONS", "/").body
        'GET,HEAD'
    """

    __slots__ = ("_methods", "_routes")

    def __init__(self, routes: Iterable[Route]) -> None:
        self._routes: dict[tuple[str, str], Route] = {}
        self._methods: dict[str, list[str]] = {}
        for route in routes:
            method = route.method.upper()
            key = (method, route.path)
            if key in self._routes:
                raise ValueError(f"Duplicate route: {method} {route.path}")
            self._routes[key] = route
            self._methods.setdefault(route.path, []).append(method)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes.values())

    def allowed_methods(self, path: str) -> tuple[str, ...]:
        """Methods answered on *path*; ``HEAD`` follows ``GET`` implicitly.

        Example:
            >>> RouteTable(DEFAULT_ROUTES).allowed_methods("/")
            ('GET', 'HEAD')
            >>> RouteTable(DEFAULT_ROUTES).allowed_methods("/missing")
            ()
        """
        methods: list[str] = []
        for method in self._methods.get(path, ()):
            if method not in methods:
                methods.append(method)
            if method == "GET" and "HEAD" not in methods:
                methods.append("HEAD")
        return tuple(methods)

    def resolve(self, method: str, target: str) -> Response:
        """Return the response for *method* and request *target*."""
        method = method.upper()
        path = request_path(target)
        route = self._routes.get((method, path))
        if route is None and method == "HEAD":
            route = self._routes.get(("GET", path))
        if route is not None:
            return route.response()
        if method == "OPTIONS":
            methods = self.allowed_methods(path)
            if methods:
                return allowed(methods)
        return not_found(method, path)


DEFAULT_ROUTES: tuple[Route, ...] = (
    Route(method="GET", path="/", status=200, body=build_greeting()),
)


def build_route_table() -> RouteTable:
    """Return the application's route table."""
    return RouteTable(DEFAULT_ROUTES)


__all__ = [
    "DEFAULT_ROUTES",
    "TEXT_PLAIN",
    "Response",
    "Route",
    "RouteTable",
    "allowed",
    "build_route_table",
    "not_found",
    "request_path",
]
