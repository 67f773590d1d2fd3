"""Read the layered ``kell_app`` configuration.

Layers, lowest first: the bundled ``defaultconfig.toml`` (``[server]
port = 8000``), then app, host and user files, ``.env`` and environment
variables. ``--set`` overrides are applied later by the CLI.

Contents:
    * :data:`DEFAULT_CONFIG_PATH` - The bundled defaults file.
    * :func:`get_config` - Cached read, one entry per profile and start dir.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from kell_app import __init__conf__

DEFAULT_CONFIG_PATH = Path(__file__).with_name("defaultconfig.toml")


@lru_cache(maxsize=4)
def get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Return the merged configuration for *profile*.

    The server reads its settings once at startup, so results are cached;
    call ``get_config.cache_clear()`` to force a re-read.

    Raises:
        ValueError: If *profile* is not a safe profile name (path
            separators, traversal, reserved names, too long).

    Example:
        >>> get_config().as_dict()["server"]["port"] >= 0
        True
    """
    if profile is not None:
        validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=DEFAULT_CONFIG_PATH,
        start_dir=start_dir,
    )


__all__ = ["DEFAULT_CONFIG_PATH", "get_config"]
