"""HTTP adapter - the listening responder.

Provides the threading HTTP server that serves the domain route table.

Structure:
    * :mod:`.config` - Server configuration model and loader
    * :mod:`.server` - Listener, request handler, and running handle

Contents:
    * :class:`.config.ServerConfig` - Validated listener settings
    * :func:`.config.load_server_config_from_dict` - Config dict loader
    * :func:`.server.start_server` - Bind and return a ListeningHandle
"""

from __future__ import annotations

from .config import ServerConfig, load_server_config_from_dict
from .server import ListeningHandle, start_server

__all__ = [
    "ListeningHandle",
    "ServerConfig",
    "load_server_config_from_dict",
    "start_server",
]
