"""Configuration adapters that never touch the filesystem.

``get_config_in_memory`` hands out the same ``[server]`` defaults that
``defaultconfig.toml`` ships, so ``serve`` under ``build_testing`` resolves
``0.0.0.0:8000`` exactly like an unconfigured install.
"""

from __future__ import annotations

from lib_layered_config import Config

from ...domain.enums import OutputFormat
from ..http.config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_REQUEST_TIMEOUT


def get_config_in_memory(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Return the bundled server defaults; *profile* and *start_dir* are ignored.

    Example:
        >>> get_config_in_memory().as_dict()["server"]["port"]
        8000
    """
    server = {"host": DEFAULT_HOST, "port": DEFAULT_PORT, "request_timeout": DEFAULT_REQUEST_TIMEOUT}
    return Config({"server": server}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Print nothing, but reject unknown sections like the real display does.

    Raises:
        ValueError: If *section* is not present in *config*.
    """
    if section is not None and section not in config.as_dict():
        raise ValueError(f"Section '{section}' not found in configuration")


__all__ = [
    "display_config_in_memory",
    "get_config_in_memory",
]
