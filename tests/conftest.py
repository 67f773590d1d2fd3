"""Shared pytest fixtures for CLI, server, and module-entry tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from kell_app.adapters.http.server import ListeningHandle
    from kell_app.adapters.memory.server import ServerSpy
    from kell_app.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use result.stdout for clean output to keep stderr log records out of
    assertions.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Only use it with commands that never bind a socket (``serve`` would
    block); ``serve`` tests go through :func:`server_cli_context`.
    """
    from kell_app.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Start from lib_cli_exit_tools defaults (tracebacks off) and reset afterwards.

    Use it with tests that call ``main`` or read the traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    try:
        yield
    finally:
        lib_cli_exit_tools.reset_config()

@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Only clears before, not after, so a monkeypatched get_config (which has
    no cache_clear) does not break teardown.
    """
    from kell_app.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts, without provenance."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory whose get_config returns the given data.

    Example:
        def test_config_display(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"server": {"port": 9000}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "9000" in result.output
    """
    from kell_app.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_server_config_from_dict=prod.load_server_config_from_dict,
            start_server=prod.start_server,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create


@dataclass
class ServerCliContext:
    """Container for serve-command test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: ServerSpy capturing start calls; set ``spy.bind_error`` to fail.
    """

    factory: Callable[[], Any]
    spy: ServerSpy


@pytest.fixture
def server_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], ServerCliContext]:
    """Create a services factory with injected config and an in-memory server.

    The returned ``serve`` never binds a socket and returns immediately.

    Example:
        def test_serve(cli_runner, server_cli_context) -> None:
            ctx = server_cli_context({"server": {"port": 9000}})
            result = cli_runner.invoke(cli, ["serve"], obj=ctx.factory)
            assert ctx.spy.started[0].port == 9000
    """
    from kell_app.adapters.memory import ServerSpy as ServerSpyImpl
    from kell_app.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> ServerCliContext:
        spy = ServerSpyImpl()
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_server_config_from_dict=prod.load_server_config_from_dict,
            start_server=spy.start_server,
            init_logging=prod.init_logging,
        )
        return ServerCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def running_server() -> Iterator[ListeningHandle]:
    """Start a real responder on a free loopback port for the test's duration."""
    from kell_app.adapters.http import ServerConfig, start_server

    handle = start_server(ServerConfig(host="127.0.0.1", port=0, request_timeout=5.0))
    thread = threading.Thread(target=handle.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True)
    thread.start()
    try:
        yield handle
    finally:
        handle.close()
        thread.join(timeout=5)
