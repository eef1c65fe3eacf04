"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (Consul, CLI, configuration, logging).

Contents:
    * :mod:`.config` - Settings loading, overrides, and display
    * :mod:`.consul` - KeyValueStore over the Consul HTTP API
    * :mod:`.tree` - Tree rendering for terminal and JSON
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
