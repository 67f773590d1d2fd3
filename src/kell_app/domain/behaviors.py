"""Pure domain functions with no I/O or framework dependencies."""

from __future__ import annotations

# The "form" typo is part of the published response body; keep it verbatim.
CANONICAL_GREETING = "Hello form the app managed by Kell!"


def build_greeting() -> str:
    r"""Return the greeting served on the root route.

    The HTTP responder and the ``hello`` command both emit this exact text,
    so clients comparing the body byte-for-byte see one stable contract.

    Returns:
        The canonical greeting string.

    Example:
        >>> build_greeting()
        'Hello form the app managed by Kell!'
    """
    return CANONICAL_GREETING


__all__ = [
    "CANONICAL_GREETING",
    "build_greeting",
]
