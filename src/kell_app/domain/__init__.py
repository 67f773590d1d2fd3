"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the greeting, the explicit route table, and the exception types
shared by the adapters.

Contents:
    * :mod:`.behaviors` - Core domain behaviors (greeting)
    * :mod:`.routes` - Route table and default-response policy
    * :mod:`.enums` - Domain enumerations (OutputFormat, ServerState)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .behaviors import (
    CANONICAL_GREETING,
    build_greeting,
)
from .enums import OutputFormat, ServerState
from .errors import BindError, ConfigurationError, RequestHandlingError
from .routes import DEFAULT_ROUTES, Response, Route, RouteTable, build_route_table

__all__ = [
    # Behaviors
    "CANONICAL_GREETING",
    "build_greeting",
    # Routes
    "DEFAULT_ROUTES",
    "Response",
    "Route",
    "RouteTable",
    "build_route_table",
    # Enums
    "OutputFormat",
    "ServerState",
    # Errors
    "BindError",
    "ConfigurationError",
    "RequestHandlingError",
]
