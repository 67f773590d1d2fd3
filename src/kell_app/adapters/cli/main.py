"""Run ``kell-app`` and turn every outcome into a process exit code.

``serve`` lets :class:`~kell_app.domain.errors.BindError` and
:class:`~kell_app.domain.errors.ConfigurationError` propagate; this module
reports them on stderr and picks the matching :class:`ExitCode`. Anything
else is summarised (or shown in full with ``--traceback``) by
``lib_cli_exit_tools``.

Contents:
    * :func:`main` - Console-script and ``python -m`` entry point.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Final

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from kell_app import __init__conf__
from kell_app.domain.errors import BindError, ConfigurationError

from .exit_codes import ExitCode, exit_code_for_bind_error

if TYPE_CHECKING:
    from kell_app.composition import AppServices

logger = logging.getLogger(__name__)

#: Characters of exception text printed without and with ``--traceback``.
SUMMARY_LIMIT: Final[int] = 500
TRACEBACK_LIMIT: Final[int] = 10_000


@contextmanager
def _preserved_traceback_flags() -> Iterator[None]:
    """Undo the root group's ``--traceback`` writes once the run is reported."""
    config = lib_cli_exit_tools.config
    saved = (config.traceback, config.traceback_force_color)
    try:
        yield
    finally:
        config.traceback, config.traceback_force_color = saved


def _report_unexpected(exc: BaseException) -> int:
    verbose = bool(lib_cli_exit_tools.config.traceback)
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=TRACEBACK_LIMIT if verbose else SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run(args: list[str], services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BindError as exc:
        logger.error("Server failed to start", extra={"error": exc.reason, "errno": exc.errno})
        click.echo(f"\nError: {exc}", err=True)
        return int(exit_code_for_bind_error(exc))
    except ConfigurationError as exc:
        logger.error("Invalid server configuration", extra={"error": str(exc)})
        click.echo(f"\nError: Invalid server configuration - {exc}", err=True)
        return int(ExitCode.CONFIG_ERROR)
    except BaseException as exc:
        # Also reached by SystemExit from commands and by Ctrl-C during serve.
        return _report_unexpected(exc)
    return int(ExitCode.SUCCESS)


def main(argv: Sequence[str] | None = None, *, services_factory: Callable[[], AppServices]) -> int:
    """Run the CLI with *services_factory* and return the exit code.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        services_factory: ``build_production`` for real use, ``build_testing``
            or a hand-wired factory in tests.

    Example:
        >>> from kell_app.composition import build_testing
        >>> main(["routes"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        with _preserved_traceback_flags():
            return _run(args, services_factory)
    finally:
        # Shutting down from a worker thread would stop logging for the rest of the process.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["SUMMARY_LIMIT", "TRACEBACK_LIMIT", "main"]
