"""In-memory KeyValueStore for tests and dry runs.

Behaves like the Consul adapter at the contract level: missing keys and
empty listings raise ``KeyNotFoundError``, listed keys are returned
absolute, exactly as stored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from lib_layered_config import Config

from ...domain.errors import KeyNotFoundError


class InMemoryKeyValueStore:
    """Dict-backed store keyed by exact string keys.

    Attributes:
        closed: True once :meth:`close` has been called.

    Example:
        >>> store = InMemoryKeyValueStore({"app/name": b"demo"})
        >>> store.list("app/")
        [('app/name', b'demo')]
        >>> store.exists("app")
        False
    """

    def __init__(self, entries: Mapping[str, bytes] | None = None) -> None:
        self._entries: dict[str, bytes] = dict(entries) if entries else {}
        self.closed = False

    def get(self, key: str) -> bytes:
        """Return the value at ``key`` or raise KeyNotFoundError."""
        try:
            return self._entries[key]
        except KeyError as exc:
            raise KeyNotFoundError(key) from exc

    def list(self, prefix: str) -> list[tuple[str, bytes]]:
        """Return entries whose key starts with ``prefix``."""
        found = [(key, value) for key, value in self._entries.items() if key.startswith(prefix)]
        if not found:
            raise KeyNotFoundError(prefix)
        return found

    def put(self, key: str, value: bytes) -> None:
        """Store ``value`` at ``key``."""
        self._entries[key] = value

    def exists(self, key: str) -> bool:
        """Return whether ``key`` is stored."""
        return key in self._entries

    def close(self) -> None:
        """Mark the store closed; data stays readable."""
        self.closed = True

    def snapshot(self) -> dict[str, bytes]:
        """Return a copy of all stored entries for test assertions."""
        return dict(self._entries)


def in_memory_store_opener(store: InMemoryKeyValueStore) -> Callable[[Config], InMemoryKeyValueStore]:
    """Return an OpenStore callable that always hands out ``store``.

    Example:
        >>> store = InMemoryKeyValueStore()
        >>> in_memory_store_opener(store)(Config({}, {})) is store
        True
    """

    def _open(config: Config) -> InMemoryKeyValueStore:
        return store

    return _open


__all__ = [
    "InMemoryKeyValueStore",
    "in_memory_store_opener",
]
