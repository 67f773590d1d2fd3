"""Centralized logging initialization for all entry points.

Configures the lib_log_rich runtime once per process from the
``[lib_log_rich]`` configuration section and bridges the standard
``logging`` module into it, so the HTTP responder's access log and the CLI
commands share one output pipeline.

Contents:
    * :class:`LoggingConfigModel` - boundary validation of the config section.
    * :func:`init_logging` - idempotent runtime initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from kell_app import __init__conf__


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` config section.

    Extra fields pass through unchanged to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> model = LoggingConfigModel(service="kell-app", environment="staging")
        >>> model.environment
        'staging'
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    ``service`` defaults to the package name when not configured.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich runtime with the provided configuration.

    Safe to call repeatedly; only the first call has an effect. Enables
    ``.env`` discovery so ``LOG_*`` variables apply, initializes the
    runtime, and attaches standard ``logging`` so module loggers
    (``logging.getLogger(__name__)``) reach the configured sinks.

    Args:
        config: Loaded layered configuration object.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
