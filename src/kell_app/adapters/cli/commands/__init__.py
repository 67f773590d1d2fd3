"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info commands from :mod:`.info`
    * Config command from :mod:`.config`
    * Server command from :mod:`.serve`
    * Route listing from :mod:`.routes`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_hello, cli_info
from .routes import cli_routes
from .serve import cli_serve

__all__ = [
    "cli_config",
    "cli_hello",
    "cli_info",
    "cli_routes",
    "cli_serve",
]
