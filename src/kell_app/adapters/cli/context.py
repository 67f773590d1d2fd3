"""Per-invocation CLI state shared between the root group and its commands.

Contents:
    * :data:`CLICK_CONTEXT_SETTINGS` - ``-h``/``--help`` on every command.
    * :class:`CLIContext` - What the root group resolved before dispatch.
    * :func:`get_cli_context` - Typed access from a subcommand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from kell_app.composition import AppServices

CLICK_CONTEXT_SETTINGS: Final[dict[str, Any]] = {"help_option_names": ["-h", "--help"]}


@dataclass(slots=True)
class CLIContext:
    """Services plus the configuration ``serve`` and ``config`` read from.

    Attributes:
        services: Port implementations chosen by the caller of ``main``.
        config: Layered configuration with root ``--set`` overrides applied.
        profile: Profile the configuration was loaded for.
        set_overrides: Raw ``--set`` strings, reapplied when ``config
            --profile`` reloads a different profile.
    """

    services: AppServices
    config: Config
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the state the root group stored on *ctx*.

    Raises:
        RuntimeError: If a command runs without the root group.
    """
    state = ctx.find_object(CLIContext)
    if state is None:
        raise RuntimeError("Command invoked outside the kell-app group")
    return state


__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "get_cli_context",
]
