"""Server configuration model and loader.

Provides the ServerConfig Pydantic model for validated, immutable listener
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from kell_app.domain.errors import ConfigurationError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_REQUEST_TIMEOUT = 30.0


class ServerConfig(BaseModel):
    """Validated, immutable listener configuration.

    The port is fixed once the server starts; ``0`` asks the OS for any free
    port, which the running handle then reports.

    Example:
        >>> config = ServerConfig()
        >>> (config.host, config.port)
        ('0.0.0.0', 8000)
        >>> ServerConfig(port=70000)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: ...
    """

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT

    @field_validator("host", mode="before")
    @classmethod
    def _strip_host(cls, v: Any) -> Any:
        """Trim whitespace; an empty host means all interfaces.

        Examples:
            >>> ServerConfig._strip_host("  127.0.0.1 ")
            '127.0.0.1'
            >>> ServerConfig._strip_host("")
            '0.0.0.0'
        """
        if isinstance(v, str):
            stripped = v.strip()
            return stripped or DEFAULT_HOST
        return v

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _coerce_zero_timeout_to_none(cls, v: Any) -> Any:
        """Convert 0 to None (no idle timeout)."""
        if v == 0:
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> ServerConfig:
        """Reject negative timeouts with a clear message.

        Raises:
            ValueError: When request_timeout is negative.
        """
        if self.request_timeout is not None and self.request_timeout < 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        return self


def _describe_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``server.<field>: <message>`` fragments."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in ("server", *error["loc"]))
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_server_section(section: Any) -> ServerConfig:
    """Validate a raw ``[server]`` section.

    Raises:
        ConfigurationError: When the section holds invalid values.

    Example:
        >>> parse_server_section({"port": "9000"}).port
        9000
        >>> parse_server_section({"port": -1})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: server.port: Input should be greater than or equal to 0
    """
    try:
        return ServerConfig.model_validate(section if section else {})
    except ValidationError as exc:
        raise ConfigurationError(_describe_errors(exc)) from exc


def load_server_config_from_dict(config_dict: Mapping[str, Any]) -> ServerConfig:
    """Load ServerConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    ServerConfig model. A missing ``[server]`` section yields the defaults.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.

    Returns:
        Validated server settings.

    Raises:
        ConfigurationError: When the section holds invalid values.

    Example:
        >>> load_server_config_from_dict({"server": {"port": 9000}}).port
        9000
        >>> load_server_config_from_dict({}).port
        8000
    """
    server_section: Any = config_dict.get("server", {})
    if isinstance(server_section, Mapping):
        server_section = dict(cast(Mapping[str, Any], server_section))
    return parse_server_section(server_section)


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_REQUEST_TIMEOUT",
    "ServerConfig",
    "load_server_config_from_dict",
    "parse_server_section",
]
