"""POSIX-conventional exit codes for CLI error paths.

:func:`~.main.main` returns these for bind and configuration failures, and
``config`` raises ``SystemExit(ExitCode.INVALID_ARGUMENT)`` for an unknown
section.

Signal codes (130, 143) are informational constants only - the application
never raises ``SystemExit`` with these values; ``lib_cli_exit_tools`` handles
signal-to-exit-code translation automatically.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
    * :func:`exit_code_for_bind_error` - map a BindError to its exit code.
"""

from __future__ import annotations

from enum import IntEnum

from kell_app.domain.errors import BindError


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0-1: generic success / failure
    * 13: EACCES
    * 22: EINVAL
    * 69: EX_UNAVAILABLE (sysexits.h)
    * 78: EX_CONFIG (sysexits.h)
    * 98: EADDRINUSE (Linux errno)
    * 128+N: signal N (informational only)

    Example:
        >>> int(ExitCode.ADDRESS_IN_USE)
        98
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    SERVICE_UNAVAILABLE = 69
    CONFIG_ERROR = 78
    ADDRESS_IN_USE = 98
    SIGNAL_INT = 130
    SIGNAL_TERM = 143


def exit_code_for_bind_error(exc: BindError) -> ExitCode:
    """Pick the exit code for a failed bind.

    Example:
        >>> import errno
        >>> exit_code_for_bind_error(BindError("0.0.0.0", 80, errno=errno.EACCES, reason="Permission denied"))
        <ExitCode.PERMISSION_DENIED: 13>
        >>> exit_code_for_bind_error(BindError("nowhere.invalid", 8000, errno=-2, reason="Name or service not known"))
        <ExitCode.SERVICE_UNAVAILABLE: 69>
    """
    if exc.address_in_use:
        return ExitCode.ADDRESS_IN_USE
    if exc.permission_denied:
        return ExitCode.PERMISSION_DENIED
    return ExitCode.SERVICE_UNAVAILABLE


__all__ = ["ExitCode", "exit_code_for_bind_error"]
