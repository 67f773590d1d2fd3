"""ServerConfig model: defaults, coercion, validation, dict loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kell_app.adapters.http.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    ServerConfig,
    load_server_config_from_dict,
    parse_server_section,
)
from kell_app.domain.errors import ConfigurationError


@pytest.mark.os_agnostic
def test_defaults_listen_on_all_interfaces_port_8000() -> None:
    config = ServerConfig()

    assert config.host == DEFAULT_HOST == "0.0.0.0"
    assert config.port == DEFAULT_PORT == 8000
    assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT


@pytest.mark.os_agnostic
def test_config_is_frozen() -> None:
    config = ServerConfig()

    with pytest.raises(ValidationError):
        config.port = 9000  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_host_is_stripped() -> None:
    assert ServerConfig(host="  127.0.0.1  ").host == "127.0.0.1"


@pytest.mark.os_agnostic
def test_blank_host_falls_back_to_all_interfaces() -> None:
    assert ServerConfig(host="   ").host == "0.0.0.0"


@pytest.mark.os_agnostic
def test_port_zero_is_allowed() -> None:
    assert ServerConfig(port=0).port == 0


@pytest.mark.os_agnostic
@pytest.mark.parametrize("port", [-1, 65536, 100000])
def test_out_of_range_port_is_rejected(port: int) -> None:
    with pytest.raises(ValidationError):
        ServerConfig(port=port)


@pytest.mark.os_agnostic
def test_zero_timeout_means_no_timeout() -> None:
    assert ServerConfig(request_timeout=0).request_timeout is None


@pytest.mark.os_agnostic
def test_negative_timeout_is_rejected() -> None:
    with pytest.raises(ValidationError, match="request_timeout must be positive"):
        ServerConfig(request_timeout=-1.0)


@pytest.mark.os_agnostic
def test_parse_server_section_coerces_numeric_strings() -> None:
    assert parse_server_section({"port": "9000"}).port == 9000


@pytest.mark.os_agnostic
def test_parse_server_section_accepts_empty_section() -> None:
    assert parse_server_section({}) == ServerConfig()


@pytest.mark.os_agnostic
def test_parse_server_section_wraps_validation_errors() -> None:
    with pytest.raises(ConfigurationError, match=r"server\.port"):
        parse_server_section({"port": 70000})


@pytest.mark.os_agnostic
def test_parse_server_section_reports_non_numeric_port() -> None:
    with pytest.raises(ConfigurationError, match=r"server\.port"):
        parse_server_section({"port": "eighty"})


@pytest.mark.os_agnostic
def test_parse_server_section_rejects_non_mapping() -> None:
    with pytest.raises(ConfigurationError):
        parse_server_section("not-a-table")


@pytest.mark.os_agnostic
def test_load_from_dict_reads_server_section() -> None:
    config = load_server_config_from_dict({"server": {"host": "127.0.0.1", "port": 9000}})

    assert (config.host, config.port) == ("127.0.0.1", 9000)


@pytest.mark.os_agnostic
def test_load_from_dict_without_section_uses_defaults() -> None:
    assert load_server_config_from_dict({"lib_log_rich": {}}) == ServerConfig()


@pytest.mark.os_agnostic
def test_load_from_dict_ignores_other_sections() -> None:
    config = load_server_config_from_dict({"server": {"port": 1234}, "other": {"port": 1}})

    assert config.port == 1234
