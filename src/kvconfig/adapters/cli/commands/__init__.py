"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Settings display from :mod:`.config`
    * Key-value commands from :mod:`.kv`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .kv import cli_exists, cli_get, cli_put, cli_tree

__all__ = [
    "cli_config",
    "cli_exists",
    "cli_get",
    "cli_info",
    "cli_put",
    "cli_tree",
]
