"""Console script entry point with production wiring.

Wires the production services from the composition layer (real config
loader, lib_log_rich, socket-binding server) before invoking the CLI.

System Role:
    Sits at package level (outside adapters) to properly wire composition into
    the adapters layer without violating clean architecture layer constraints.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run ``kell-app`` with production services and return its exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
