"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config

# Configuration services
from ..adapters.config.loader import get_config

# Store services
from ..adapters.consul.store import open_consul_store

# Logging services
from ..adapters.logging.setup import init_logging

# Rendering services
from ..adapters.tree.display import render_tree

# Static conformance assertions: pyright checks that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory import InMemoryKeyValueStore, TreeSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        OpenStore,
        RenderTree,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_open_store: OpenStore = open_consul_store
    _assert_render_tree: RenderTree = render_tree
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    open_store: OpenStore
    render_tree: RenderTree
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters (Consul, lib_layered_config, lib_log_rich)."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        open_store=open_consul_store,
        render_tree=render_tree,
        init_logging=init_logging,
    )


def build_testing(*, store: InMemoryKeyValueStore | None = None, spy: TreeSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        store: Store handed to every command. A fresh empty store is used
            when None; pass your own to seed keys and inspect writes.
        spy: TreeSpy capturing rendered trees. A fresh spy is used when None.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        InMemoryKeyValueStore,
        TreeSpy,
        display_config_in_memory,
        get_config_in_memory,
        in_memory_store_opener,
        init_logging_in_memory,
    )

    kv_store = store if store is not None else InMemoryKeyValueStore()
    tree_spy = spy if spy is not None else TreeSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        open_store=in_memory_store_opener(kv_store),
        render_tree=tree_spy.render_tree,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Store
    "open_consul_store",
    # Rendering
    "render_tree",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
