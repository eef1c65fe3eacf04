"""Shared pytest fixtures for store, CLI, and module-entry tests.

Centralizes test infrastructure following clean architecture principles:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from kvconfig.adapters.memory import InMemoryKeyValueStore, TreeSpy

if TYPE_CHECKING:
    from kvconfig.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

SAMPLE_ENTRIES: dict[str, bytes] = {
    "app/name": b"demo",
    "app/db/host": b"localhost",
    "app/db/port": b"5432",
    "app/feature/": b"",
    "other/key": b"x",
}


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g., JSON parsing) so log
    messages on stderr do not contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for commands that never reach Consul."""
    from kvconfig.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before each test.

    Only clears before, not after, to avoid errors when the function has
    been monkeypatched during the test (losing cache_clear method).
    """
    from kvconfig.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O.

    Example:
        def test_consul_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"consul": {"timeout": 2.0}})
            assert config.get("consul.timeout") == 2.0
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def sample_store() -> InMemoryKeyValueStore:
    """Provide an in-memory store seeded with a small ``app/`` hierarchy.

    Holds ``app/name``, ``app/db/host``, ``app/db/port``, the folder marker
    ``app/feature/``, and an unrelated ``other/key``.
    """
    return InMemoryKeyValueStore(SAMPLE_ENTRIES)


@dataclass
class KvCliContext:
    """Container for key-value CLI test setup.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        store: In-memory store every command opens.
        spy: TreeSpy recording rendered trees.
    """

    factory: Callable[[], AppServices]
    store: InMemoryKeyValueStore
    spy: TreeSpy


@pytest.fixture
def kv_cli_context(
    clear_config_cache: None,
) -> Callable[..., KvCliContext]:
    """Create a CLI test context over an in-memory store.

    Returns a function taking optional store entries and an optional config
    dict. Commands run against the store and render into the spy; the
    config replaces the layered settings.

    Example:
        def test_tree(cli_runner: CliRunner, kv_cli_context: Callable[..., KvCliContext]) -> None:
            ctx = kv_cli_context({"app/a": b"1"})
            result = cli_runner.invoke(cli, ["tree", "app/"], obj=ctx.factory)
            assert ctx.spy.last_tree == {"a": Leaf(b"1")}
    """
    from dataclasses import replace

    from kvconfig.composition import build_testing

    def _create(
        entries: dict[str, bytes] | None = None,
        config_data: dict[str, Any] | None = None,
    ) -> KvCliContext:
        store = InMemoryKeyValueStore(SAMPLE_ENTRIES if entries is None else entries)
        spy = TreeSpy()
        services = build_testing(store=store, spy=spy)
        if config_data is not None:
            config = Config(config_data, {})

            def _fake_get_config(**_kwargs: Any) -> Config:
                return config

            services = replace(services, get_config=_fake_get_config)
        return KvCliContext(factory=lambda: services, store=store, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a production-wired CLI context with injected settings.

    Only the settings loader is replaced, so ``config`` renders through the
    real lib_layered_config display.
    """
    from dataclasses import replace

    from kvconfig.composition import build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(build_production(), get_config=_fake_get_config)
        return lambda: services

    return _create
