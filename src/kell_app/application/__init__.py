"""Application layer - use cases and port definitions.

Contains use cases that orchestrate domain logic and port protocols that
define the interfaces for adapter implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadServerConfigFromDict,
    ServerHandle,
    StartServer,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadServerConfigFromDict",
    "ServerHandle",
    "StartServer",
]
