"""Package metadata and PEP 561 marker tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pytest
import rtoml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def _load_pyproject() -> dict[str, Any]:
    """Load and parse pyproject.toml from the project root."""
    return rtoml.load(PYPROJECT_PATH)


def _wheel_table() -> dict[str, Any]:
    pyproject = _load_pyproject()
    tool_table = cast(dict[str, Any], pyproject.get("tool", {}))
    hatch_table = cast(dict[str, Any], tool_table.get("hatch", {}))
    build_table = cast(dict[str, Any], hatch_table.get("build", {}))
    targets_table = cast(dict[str, Any], build_table.get("targets", {}))
    return cast(dict[str, Any], targets_table.get("wheel", {}))


def _get_package_dir() -> Path:
    """Locate the package directory based on pyproject.toml configuration."""
    for package_entry in cast(list[Any], _wheel_table().get("packages", [])):
        if isinstance(package_entry, str):
            candidate = PROJECT_ROOT / package_entry
            if candidate.is_dir():
                return candidate
    raise AssertionError("Unable to locate package directory")


@pytest.mark.os_agnostic
def test_when_print_info_runs_it_outputs_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    from kell_app import print_info

    print_info()

    captured = capsys.readouterr().out
    assert "kell_app" in captured
    assert "version" in captured


@pytest.mark.os_agnostic
def test_metadata_constants_are_set() -> None:
    from kell_app import __init__conf__

    assert __init__conf__.name == "kell_app"
    assert __init__conf__.version
    assert __init__conf__.shell_command == "kell-app"


@pytest.mark.os_agnostic
def test_metadata_matches_pyproject() -> None:
    from kell_app import __init__conf__

    project = cast(dict[str, Any], _load_pyproject()["project"])

    assert project["name"] == __init__conf__.name
    assert project["version"] == __init__conf__.version
    assert __init__conf__.shell_command in cast(dict[str, Any], project["scripts"])


@pytest.mark.os_agnostic
def test_default_config_ships_with_the_package() -> None:
    default_config = _get_package_dir() / "adapters" / "config" / "defaultconfig.toml"

    parsed = rtoml.load(default_config)

    assert parsed["server"]["port"] == 8000
    assert parsed["server"]["host"] == "0.0.0.0"


@pytest.mark.os_agnostic
def test_py_typed_marker_exists() -> None:
    py_typed = _get_package_dir() / "py.typed"
    assert py_typed.is_file(), f"PEP 561 marker not found at {py_typed}"


@pytest.mark.os_agnostic
def test_py_typed_marker_included_in_wheel_config() -> None:
    includes = cast(list[str], _wheel_table().get("include", []))
    assert any("py.typed" in entry for entry in includes), "py.typed must be in wheel build includes"
