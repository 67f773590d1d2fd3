"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

import errno as _errno


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from kell_app.domain.errors import ConfigurationError
        >>> err = ConfigurationError("server.port must be between 0 and 65535")
        >>> str(err)
        'server.port must be between 0 and 65535'
    """


class BindError(Exception):
    """The listening socket could not be established.

    Carries the requested address and the underlying ``errno`` so the CLI
    boundary can pick an exit code without parsing the message.

    Attributes:
        host: Requested bind address.
        port: Requested bind port.
        errno: OS error number, or None when the failure had none.
        reason: Human-readable cause from the OS.

    Example:
        >>> err = BindError("0.0.0.0", 8000, errno=98, reason="Address already in use")
        >>> str(err)
        'Cannot bind 0.0.0.0:8000: Address already in use'
        >>> err.address_in_use
        True
    """

    def __init__(self, host: str, port: int, *, errno: int | None = None, reason: str = "") -> None:
        self.host = host
        self.port = port
        self.errno = errno
        self.reason = reason or "unknown error"
        super().__init__(f"Cannot bind {host}:{port}: {self.reason}")

    @property
    def address_in_use(self) -> bool:
        """True when another socket already owns the address."""
        return self.errno == _errno.EADDRINUSE

    @property
    def permission_denied(self) -> bool:
        """True when the process may not bind the port (e.g. privileged port)."""
        return self.errno in (_errno.EACCES, _errno.EPERM)


class RequestHandlingError(Exception):
    """A single connection failed while being served.

    Never propagated past the connection that raised it; the server records
    it in the log and keeps accepting.
    """


__all__ = [
    "BindError",
    "ConfigurationError",
    "RequestHandlingError",
]
