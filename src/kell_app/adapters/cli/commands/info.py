"""Basic CLI commands for package metadata and the greeting.

Contents:
    * :func:`cli_info` - Display package metadata.
    * :func:`cli_hello` - Print the greeting served on ``GET /``.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from kell_app import __init__conf__
from kell_app.domain.behaviors import build_greeting

from ..context import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()


@click.command("hello", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_hello() -> None:
    """Print the greeting the server returns for ``GET /``.

    Example:
        >>> from click.testing import CliRunner
        >>> result = CliRunner().invoke(cli_hello)
        >>> result.output
        'Hello form the app managed by Kell!\\n'
    """
    with lib_log_rich.runtime.bind(job_id="cli-hello", extra={"command": "hello"}):
        logger.info("Executing hello command")
        click.echo(build_greeting())


__all__ = ["cli_hello", "cli_info"]
