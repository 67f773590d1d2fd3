"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    The first dot separates the section from the key path and the first
    ``=`` separates the path from the value, so values may contain ``=``.

    Raises:
        ValueError: If the string lacks ``=``, has no dot in the key, or has
            empty section/key components.

    Examples:
        >>> override = parse_override("server.port=9000")
        >>> (override.section, override.key_path, override.value)
        ('server', ('port',), 9000)

        >>> parse_override("server.host=127.0.0.1").value
        '127.0.0.1'
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    path_part, value_str = raw.split("=", maxsplit=1)

    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_parts = path_part.split(".")

    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=tuple(key_parts), value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Examples:
        >>> coerce_value("8000")
        8000
        >>> coerce_value("2.5")
        2.5
        >>> coerce_value("false")
        False
        >>> coerce_value("null")
        >>> coerce_value("localhost")
        'localhost'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Write *override* into the nested dict passed to ``Config.with_overrides()``.

    Examples:
        >>> d: dict[str, dict[str, object]] = {}
        >>> _nest_override(d, ConfigOverride(section="server", key_path=("port",), value=9000))
        >>> d
        {'server': {'port': 9000}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            msg = f"Expected dict at key {part!r}, got {type(existing).__name__}"
            raise TypeError(msg)
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge ``--set`` overrides into a Config instance.

    Args:
        config: Original immutable Config from file/env layers.
        raw_overrides: Tuple of ``SECTION.KEY=VALUE`` strings.

    Returns:
        New Config instance with overrides applied, or the original if
        ``raw_overrides`` is empty.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"server": {"port": 8000}}, {})
        >>> apply_overrides(cfg, ("server.port=9000",))["server"]["port"]
        9000
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))

    return config.with_overrides(overrides)


def section_with_options(config_dict: Mapping[str, Any], section: str, **options: Any) -> dict[str, Any]:
    """Return a copy of *config_dict* with non-None *options* merged into *section*.

    Command options such as ``serve --port`` outrank every configuration
    layer; ``None`` means the option was not given.

    Examples:
        >>> section_with_options({"server": {"port": 8000, "host": "0.0.0.0"}}, "server", port=9000, host=None)
        {'server': {'port': 9000, 'host': '0.0.0.0'}}
        >>> section_with_options({}, "server", port=None)
        {'server': {}}
    """
    merged = dict(config_dict)
    current: Any = merged.get(section, {})
    if not isinstance(current, Mapping):
        # Leave malformed sections for the model validator to report.
        return merged
    base = dict(cast(Mapping[str, Any], current))
    base.update({key: value for key, value in options.items() if value is not None})
    merged[section] = base
    return merged


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "parse_override",
    "coerce_value",
    "apply_overrides",
    "section_with_options",
]
