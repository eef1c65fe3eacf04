"""Application layer - use cases and port definitions.

Contains use cases that orchestrate domain logic and port protocols that
define the interfaces for adapter implementations.

Contents:
    * :mod:`.ports` - Protocol definitions for adapters (store, config, logging)
    * :mod:`.configuration` - KeyValueConfiguration use case
"""

from __future__ import annotations

from .configuration import KeyValueConfiguration
from .ports import (
    DisplayConfig,
    GetConfig,
    InitLogging,
    KeyValueStore,
    OpenStore,
    RenderTree,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "KeyValueConfiguration",
    "KeyValueStore",
    "OpenStore",
    "RenderTree",
]
