"""Static package metadata surfaced to CLI commands and documentation.

Keep these values in sync with ``pyproject.toml``.
"""

from __future__ import annotations

#: Distribution name declared in pyproject.toml.
name = "kell_app"
#: Human-readable summary shown in CLI help output.
title = "Static greeting HTTP service managed by Kell"
#: Current release version pulled from pyproject.toml.
version = "0.1.0"
#: Repository homepage presented to users.
homepage = "https://github.com/kell-dev/kell-app"
#: Author attribution surfaced in CLI output.
author = "Kell maintainers"
#: Contact email surfaced in CLI output.
author_email = "maintainers@kell.dev"
#: Console-script name published by the package.
shell_command = "kell-app"

#: Vendor identifier for lib_layered_config paths (macOS/Windows)
LAYEREDCONF_VENDOR: str = "kell"
#: Application name for lib_layered_config paths (macOS/Windows)
LAYEREDCONF_APP: str = "kell-app"
#: Configuration slug for lib_layered_config Linux paths and environment variables
LAYEREDCONF_SLUG: str = "kell-app"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for kell_app:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
