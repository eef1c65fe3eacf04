"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no Consul agent, no filesystem, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
    * :mod:`.store` - Dict-backed KeyValueStore
    * :mod:`.tree` - Tree rendering spy
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory
from .store import InMemoryKeyValueStore, in_memory_store_opener
from .tree import TreeSpy

# Static conformance assertions
if TYPE_CHECKING:
    from kvconfig.application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        KeyValueStore,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_store: KeyValueStore = InMemoryKeyValueStore()

__all__ = [
    "InMemoryKeyValueStore",
    "TreeSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "in_memory_store_opener",
    "init_logging_in_memory",
]
