"""Application ports: Protocol definitions for adapter implementations.

Callable ports define a ``__call__`` method whose signature matches the
corresponding adapter function, so module-level functions satisfy them via
structural subtyping (PEP 544). :class:`KeyValueStore` is an object port
implemented by the Consul and in-memory store adapters.

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``Console``) are imported under ``TYPE_CHECKING`` only; the application
    layer never imports adapter libraries at runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..domain.tree import Tree


class KeyValueStore(Protocol):
    """Flat ``/``-delimited key-value backend.

    Implementations raise ``KeyNotFoundError`` for missing keys and empty
    listings, and ``BackendError`` for transport or server failures.
    """

    def get(self, key: str) -> bytes:
        """Return the value stored at exactly ``key``."""
        ...

    def list(self, prefix: str) -> list[tuple[str, bytes]]:
        """Return every ``(absolute_key, value)`` whose key starts with ``prefix``."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Write or overwrite the value at ``key``."""
        ...

    def exists(self, key: str) -> bool:
        """Return whether a value is stored at exactly ``key``."""
        ...

    def close(self) -> None:
        """Release connections held by the store."""
        ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class OpenStore(Protocol):
    """Build a KeyValueStore from the ``[consul]`` settings of a Config."""

    def __call__(self, config: Config) -> KeyValueStore: ...


class RenderTree(Protocol):
    """Render a materialized tree in the requested format."""

    def __call__(self, tree: Tree, *, output_format: OutputFormat = ..., title: str = ...) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "KeyValueStore",
    "OpenStore",
    "RenderTree",
]
