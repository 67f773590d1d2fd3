"""The ``kell-app`` command group.

Resolves services, configuration and logging once per invocation and
stores them as a :class:`~.context.CLIContext` for ``serve``, ``routes``,
``hello``, ``info`` and ``config``.

Contents:
    * :func:`cli` - Root group with ``--traceback``, ``--profile`` and ``--set``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import lib_cli_exit_tools
import rich_click as click

from kell_app import __init__conf__
from kell_app.adapters.config.overrides import apply_overrides

from .context import CLICK_CONTEXT_SETTINGS, CLIContext

if TYPE_CHECKING:
    from kell_app.composition import AppServices


def _load_context(factory: Any, profile: str | None, set_overrides: tuple[str, ...]) -> CLIContext:
    """Build services, read configuration and start logging.

    Raises:
        RuntimeError: If *factory* is not callable; ``main`` always passes one.
        click.UsageError: If a ``--set`` value is malformed.
    """
    if not callable(factory):
        raise RuntimeError("kell-app was started without a services factory")
    services = cast("Callable[[], AppServices]", factory)()
    try:
        config = apply_overrides(services.get_config(profile=profile), set_overrides)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(str(exc)) from exc
    services.init_logging(config)
    return CLIContext(services=services, config=config, profile=profile, set_overrides=set_overrides)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print the full Python traceback when a command fails")
@click.option("--profile", default=None, help="Configuration profile to load, e.g. 'staging'")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one setting, e.g. server.port=9000 (repeatable)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Serve the Kell greeting over HTTP, plus helpers to inspect it.

    Example:
        >>> from click.testing import CliRunner
        >>> from kell_app.composition import build_testing
        >>> CliRunner().invoke(cli, ["hello"], obj=build_testing).exit_code
        0
    """
    # main() reads these after the command returns or raises.
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    ctx.obj = _load_context(ctx.obj, profile, set_overrides)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Deferred: the command modules import .context from this package.
    from .commands import cli_config, cli_hello, cli_info, cli_routes, cli_serve

    for command in (cli_serve, cli_routes, cli_hello, cli_info, cli_config):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
