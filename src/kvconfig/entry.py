"""Console script entry point (``kvconfig``) with production wiring.

Lives at package level, outside the adapters layer, so it may import the
composition root and hand ``build_production`` to the CLI.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI against Consul and the layered settings; return the exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
