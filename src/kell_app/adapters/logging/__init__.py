"""Logging adapter - lib_log_rich setup.

Initializes lib_log_rich once for the CLI and the HTTP responder.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
"""

from __future__ import annotations

from .setup import init_logging

__all__ = ["init_logging"]
