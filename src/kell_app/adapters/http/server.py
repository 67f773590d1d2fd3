"""HTTP responder built on the standard library's threading HTTP server.

Binds one listening socket and answers every request from the domain
route table. Each accepted connection runs on its own daemon thread; the
responses are immutable, so no coordination between threads is needed.

Contents:
    * :class:`RouteRequestHandler` - Dispatches every method to the route table.
    * :class:`RoutingHTTPServer` - Threading server owning the socket and table.
    * :class:`ListeningHandle` - Running server returned by :func:`start_server`.
    * :func:`start_server` - Bind and return a handle, or raise BindError.
"""

from __future__ import annotations

import logging
import socket
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from kell_app import __init__conf__
from kell_app.domain.enums import ServerState
from kell_app.domain.errors import BindError, RequestHandlingError
from kell_app.domain.routes import RouteTable, build_route_table

from .config import ServerConfig

logger = logging.getLogger(__name__)

_WILDCARD_HOSTS = frozenset({"", "0.0.0.0", "::"})

#: Largest request body read and thrown away; bigger ones close the connection.
MAX_DISCARDED_BODY = 64 * 1024
_DRAIN_CHUNK = 8192


class RouteRequestHandler(BaseHTTPRequestHandler):
    """Answer each request with the route table's response."""

    server: RoutingHTTPServer
    server_version = f"{__init__conf__.name}/{__init__conf__.version}"
    sys_version = ""
    protocol_version = "HTTP/1.1"

    def setup(self) -> None:
        # StreamRequestHandler.setup applies self.timeout to the socket.
        self.timeout = self.server.request_timeout
        super().setup()

    def _dispatch(self) -> None:
        response = self.server.route_table.resolve(self.command, self.path)
        body = response.encoded_body()
        try:
            self._discard_request_body()
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(len(body)))
            for name, value in response.headers:
                self.send_header(name, value)
            if self.close_connection:
                self.send_header("Connection", "close")
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(body)
        except OSError as exc:
            raise RequestHandlingError(f"{self.command} {self.path}: {exc}") from exc

    def _discard_request_body(self) -> None:
        """Consume a small request body so the next keep-alive request parses cleanly.

        Bodies that are chunked, unparsable or larger than
        :data:`MAX_DISCARDED_BODY` are left unread and the connection is
        closed after the response.
        """
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            self.close_connection = True
            return
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self.close_connection = True
            return
        if length < 0 or length > MAX_DISCARDED_BODY:
            self.close_connection = True
            return
        while length > 0:
            chunk = self.rfile.read(min(length, _DRAIN_CHUNK))
            if not chunk:
                self.close_connection = True
                return
            length -= len(chunk)

    do_GET = _dispatch
    do_HEAD = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_PATCH = _dispatch
    do_DELETE = _dispatch
    do_OPTIONS = _dispatch

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)

    def log_error(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.warning("%s - %s", self.address_string(), format % args)


class RoutingHTTPServer(ThreadingHTTPServer):
    """Threading HTTP server bound to a single route table.

    Failures inside one connection are reported through :meth:`handle_error`
    and never reach the accept loop.
    """

    daemon_threads = True
    request_queue_size = 128
    # SO_REUSEADDR on Windows lets a second process steal a bound port.
    allow_reuse_address = sys.platform != "win32"

    def __init__(
        self,
        server_address: tuple[str, int],
        route_table: RouteTable,
        *,
        request_timeout: float | None = None,
    ) -> None:
        if ":" in server_address[0]:
            self.address_family = socket.AF_INET6
        self.route_table = route_table
        self.request_timeout = request_timeout
        super().__init__(server_address, RouteRequestHandler)

    def handle_error(self, request: Any, client_address: Any) -> None:
        exc = sys.exc_info()[1]
        if isinstance(exc, RequestHandlingError):
            logger.debug("Connection from %s dropped: %s", client_address, exc)
            return
        logger.error(
            "Unhandled error while serving %s",
            client_address,
            extra={"error_type": type(exc).__name__ if exc else None},
            exc_info=True,
        )


class ListeningHandle:
    """A bound, listening HTTP responder.

    The socket is bound as soon as the handle exists; :meth:`serve_forever`
    starts answering. :meth:`close` stops the accept loop (when running in
    another thread) and releases the socket.
    """

    __slots__ = ("_closed", "_lock", "_server", "_serving")

    def __init__(self, server: RoutingHTTPServer) -> None:
        self._server = server
        self._lock = threading.Lock()
        self._serving = False
        self._closed = False

    @property
    def host(self) -> str:
        return str(self._server.server_address[0])

    @property
    def port(self) -> int:
        return int(self._server.server_address[1])

    @property
    def url(self) -> str:
        """Browsable URL; wildcard binds are reported as ``localhost``.

        Example:
            >>> handle = start_server(ServerConfig(host="127.0.0.1", port=0))
            >>> handle.url.startswith("http://127.0.0.1:")
            True
            >>> handle.close()
        """
        host = self.host
        if host in _WILDCARD_HOSTS:
            host = "localhost"
        elif ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}"

    @property
    def state(self) -> ServerState:
        return ServerState.NOT_LISTENING if self._closed else ServerState.LISTENING

    @property
    def route_table(self) -> RouteTable:
        return self._server.route_table

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        """Handle connections until :meth:`close` is called from another thread.

        Raises:
            RuntimeError: If the handle was already closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Server handle is closed")
            self._serving = True
        self._server.serve_forever(poll_interval=poll_interval)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            serving = self._serving
        if serving:
            self._server.shutdown()
        self._server.server_close()
        logger.debug("Listener on %s closed", self.url)

    def __enter__(self) -> ListeningHandle:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


def start_server(config: ServerConfig, *, route_table: RouteTable | None = None) -> ListeningHandle:
    """Bind the listening socket described by *config*.

    Args:
        config: Validated listener settings.
        route_table: Routes to serve; defaults to the application's table.

    Returns:
        A handle in the ``LISTENING`` state. Call ``serve_forever()`` to
        start answering requests.

    Raises:
        BindError: If the address is in use, the process lacks permission,
            or the host cannot be resolved.
    """
    table = route_table if route_table is not None else build_route_table()
    try:
        server = RoutingHTTPServer(
            (config.host, config.port),
            table,
            request_timeout=config.request_timeout,
        )
    except OSError as exc:
        reason = exc.strerror or str(exc)
        logger.error(
            "Bind failed",
            extra={"host": config.host, "port": config.port, "errno": exc.errno, "reason": reason},
        )
        raise BindError(config.host, config.port, errno=exc.errno, reason=reason) from exc

    handle = ListeningHandle(server)
    logger.info("HTTP responder bound", extra={"host": handle.host, "port": handle.port, "routes": len(table)})
    return handle


__all__ = [
    "MAX_DISCARDED_BODY",
    "ListeningHandle",
    "RouteRequestHandler",
    "RoutingHTTPServer",
    "start_server",
]
