"""In-memory server adapters for testing.

Provides a server starter that satisfies the same Protocol as the production
adapter but never opens a socket.

Contents:
    * :class:`InMemoryServerHandle` - Handle whose accept loop returns at once.
    * :class:`ServerSpy` - Captures start calls for test assertions.
    * :func:`load_server_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.enums import ServerState
from ...domain.errors import BindError
from ...domain.routes import RouteTable, build_route_table
from ..http.config import ServerConfig, parse_server_section


@dataclass
class InMemoryServerHandle:
    """Listening handle stand-in; ``serve_forever`` returns immediately.

    Example:
        >>> handle = InMemoryServerHandle(host="0.0.0.0", port=8000, route_table=build_route_table())
        >>> handle.url
        'http://localhost:8000'
    """

    host: str
    port: int
    route_table: RouteTable
    served: bool = False
    closed: bool = False

    @property
    def url(self) -> str:
        host = "localhost" if self.host in ("", "0.0.0.0", "::") else self.host
        return f"http://{host}:{self.port}"

    @property
    def state(self) -> ServerState:
        return ServerState.NOT_LISTENING if self.closed else ServerState.LISTENING

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        self.served = True

    def close(self) -> None:
        self.closed = True


def _empty_handle_list() -> list[InMemoryServerHandle]:
    """Create an empty typed list for started handles."""
    return []


def _empty_config_list() -> list[ServerConfig]:
    """Create an empty typed list for start requests."""
    return []


@dataclass
class ServerSpy:
    """Captures server start operations for test assertions.

    Each test should create its own ServerSpy instance to avoid cross-test pollution.

    Attributes:
        started: Configs passed to each start_server call.
        handles: Handles returned by successful starts.
        bind_error: When set, start_server raises this instead of returning.

    Example:
        >>> spy = ServerSpy()
        >>> handle = spy.start_server(ServerConfig(port=9000))
        >>> handle.port
        9000
        >>> len(spy.started)
        1
    """

    started: list[ServerConfig] = field(default_factory=_empty_config_list)
    handles: list[InMemoryServerHandle] = field(default_factory=_empty_handle_list)
    bind_error: BindError | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.started.clear()
        self.handles.clear()
        self.bind_error = None

    def start_server(self, config: ServerConfig, *, route_table: RouteTable | None = None) -> InMemoryServerHandle:
        """Record the call and return a handle, or raise the configured BindError.

        Raises:
            BindError: If bind_error is set.
        """
        self.started.append(config)
        if self.bind_error is not None:
            raise self.bind_error
        handle = InMemoryServerHandle(
            host=config.host,
            port=config.port,
            route_table=route_table if route_table is not None else build_route_table(),
        )
        self.handles.append(handle)
        return handle


def load_server_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> ServerConfig:
    """Parse the server section with the real model, skipping layered lookups."""
    return parse_server_section(config_dict.get("server", {}))


__all__ = [
    "InMemoryServerHandle",
    "ServerSpy",
    "load_server_config_from_dict_in_memory",
]
