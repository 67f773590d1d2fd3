"""Public package surface exposing the greeting, routes, and configuration.

Routes imports through the architectural layers:
- Domain exports: greeting and route table
- Composition exports: wired adapter services (configuration, server)
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .composition import get_config, start_server

# Domain exports
from .domain.behaviors import (
    CANONICAL_GREETING,
    build_greeting,
)
from .domain.errors import BindError
from .domain.routes import build_route_table

__all__ = [
    "CANONICAL_GREETING",
    "BindError",
    "build_greeting",
    "build_route_table",
    "get_config",
    "print_info",
    "start_server",
]
