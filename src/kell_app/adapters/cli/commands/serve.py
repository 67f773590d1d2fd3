"""Run the HTTP responder.

Contents:
    * :func:`cli_serve` - Bind the configured port and serve until the process ends.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from kell_app.adapters.config.overrides import section_with_options

from ..context import CLICK_CONTEXT_SETTINGS, get_cli_context

logger = logging.getLogger(__name__)


@click.command("serve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--host", type=str, default=None, help="Bind address (overrides server.host)")
@click.option(
    "--port",
    type=click.IntRange(0, 65535),
    default=None,
    help="Bind port (overrides server.port; default 8000)",
)
@click.pass_context
def cli_serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the greeting on ``GET /`` until the process is stopped.

    Exit codes when the server cannot start:

    \b
    * 98 - the port is already in use
    * 13 - permission denied (e.g. privileged port)
    * 69 - any other bind failure (unresolvable host, ...)
    * 78 - invalid ``[server]`` configuration
    """
    cli_ctx = get_cli_context(ctx)
    services = cli_ctx.services
    config_dict = section_with_options(cli_ctx.config.as_dict(), "server", host=host, port=port)
    # ConfigurationError and BindError are mapped to exit codes by main().
    server_config = services.load_server_config_from_dict(config_dict)

    extra = {"command": "serve", "host": server_config.host, "port": server_config.port}
    with lib_log_rich.runtime.bind(job_id="cli-serve", extra=extra):
        handle = services.start_server(server_config)
        message = f"Server is running on {handle.url}"
        logger.info(message, extra={"url": handle.url})
        click.echo(message)
        try:
            handle.serve_forever()
        finally:
            handle.close()


__all__ = ["cli_serve"]
