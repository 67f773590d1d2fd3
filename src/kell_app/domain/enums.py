"""Type-safe domain enums for output formats and server lifecycle."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Defines valid output format choices for the config command.
    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ServerState(str, Enum):
    """Lifecycle states of the HTTP responder.

    A responder starts in ``NOT_LISTENING`` and moves to ``LISTENING`` once
    the socket is bound. There is no transition back while the process runs.

    Example:
        >>> ServerState.LISTENING.value
        'listening'
    """

    NOT_LISTENING = "not_listening"
    LISTENING = "listening"


__all__ = [
    "OutputFormat",
    "ServerState",
]
