"""Configuration adapter - loading, display, and overrides.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
"""

from __future__ import annotations

from .display import display_config
from .loader import DEFAULT_CONFIG_PATH, get_config
from .overrides import apply_overrides

__all__ = [
    "get_config",
    "DEFAULT_CONFIG_PATH",
    "display_config",
    "apply_overrides",
]
