"""Command-line interface for the Kell greeting service.

``main`` is what the ``kell-app`` script and ``python -m kell_app`` call;
``cli`` is the click group, importable for ``CliRunner`` based tests.
"""

from __future__ import annotations

from .commands import cli_config, cli_hello, cli_info, cli_routes, cli_serve
from .exit_codes import ExitCode, exit_code_for_bind_error
from .main import main
from .root import cli

__all__ = [
    "ExitCode",
    "cli",
    "cli_config",
    "cli_hello",
    "cli_info",
    "cli_routes",
    "cli_serve",
    "exit_code_for_bind_error",
    "main",
]
