"""Application ports - callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``ServerConfig``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat, ServerState
from ..domain.routes import RouteTable

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.http.config import ServerConfig


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class LoadServerConfigFromDict(Protocol):
    """Load ServerConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ServerConfig: ...


class ServerHandle(Protocol):
    """A bound listener as seen by the CLI."""

    @property
    def host(self) -> str: ...

    @property
    def port(self) -> int: ...

    @property
    def url(self) -> str: ...

    @property
    def state(self) -> ServerState: ...

    def serve_forever(self, poll_interval: float = ...) -> None: ...

    def close(self) -> None: ...


class StartServer(Protocol):
    """Bind the listening socket or raise BindError."""

    def __call__(self, config: ServerConfig, *, route_table: RouteTable | None = ...) -> ServerHandle: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadServerConfigFromDict",
    "ServerHandle",
    "StartServer",
]
