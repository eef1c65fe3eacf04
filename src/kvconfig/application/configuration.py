"""Configuration access use case over a KeyValueStore.

Composes key normalization, store access, and tree materialization into the
operations callers use: single-key ``get``/``put``/``exists`` and the
recursive ``get_recursive`` that returns a nested tree for a prefix.

Contents:
    * :class:`KeyValueConfiguration` - Use case bound to one store.

System Role:
    Application layer. Depends on the domain and on the ``KeyValueStore``
    port only; the concrete store is injected by the composition root.
    Store errors propagate unchanged; nothing is retried or cached.
"""

from __future__ import annotations

import logging

from ..domain.enums import ConflictPolicy
from ..domain.keys import format_key, strip_request_key
from ..domain.tree import MaterializeReport, Tree, materialize
from .ports import KeyValueStore

logger = logging.getLogger(__name__)


class KeyValueConfiguration:
    """Read and write hierarchical configuration stored under flat keys.

    Args:
        store: Backend implementing the KeyValueStore port.
        policy: Default leaf/folder conflict handling for ``get_recursive``.

    Example:
        >>> from kvconfig.adapters.memory import InMemoryKeyValueStore
        >>> store = InMemoryKeyValueStore({"app/db/host": b"localhost", "app/db/port": b"5432"})
        >>> configuration = KeyValueConfiguration(store)
        >>> configuration.get_recursive("/app/")
        {'db': {'host': Leaf(value=b'localhost'), 'port': Leaf(value=b'5432')}}
        >>> configuration.get("/app/db/port")
        b'5432'
    """

    def __init__(self, store: KeyValueStore, *, policy: ConflictPolicy = ConflictPolicy.LAST_WRITE_WINS) -> None:
        self._store = store
        self._policy = policy

    @property
    def policy(self) -> ConflictPolicy:
        """Default conflict policy used by :meth:`get_recursive`."""
        return self._policy

    def get(self, key: str) -> bytes:
        """Return the raw value stored at ``key``.

        Raises:
            KeyNotFoundError: When nothing is stored at the key.
            BackendError: When the store cannot be reached.
        """
        return self._store.get(format_key(key))

    def get_recursive(self, prefix: str, *, policy: ConflictPolicy | None = None) -> Tree:
        """Materialize every entry under ``prefix`` into a nested tree.

        Keys are listed with the normalized prefix, the echoed prefix is
        stripped from each result, and the remainders are grouped by path
        segment. Dropped keys and leaf/folder conflicts are logged as
        warnings.

        Args:
            prefix: Caller-facing key prefix; leading ``/`` is ignored.
            policy: Overrides the instance conflict policy for this call.

        Returns:
            Freshly built tree owned by the caller.

        Raises:
            KeyNotFoundError: When no key starts with the prefix.
            KeyConflictError: Under ``ConflictPolicy.STRICT`` on a conflict.
            BackendError: When the store cannot be reached.
        """
        request_key = format_key(prefix)
        effective_policy = policy if policy is not None else self._policy
        entries = self._store.list(request_key)
        logger.debug("Listed keys", extra={"prefix": request_key, "count": len(entries)})

        report = MaterializeReport()
        tree = materialize(
            ((strip_request_key(request_key, key), value) for key, value in entries),
            policy=effective_policy,
            report=report,
        )
        _log_report(request_key, report)
        return tree

    def put(self, key: str, value: bytes | str) -> None:
        """Write ``value`` at ``key``; strings are stored UTF-8 encoded."""
        raw = value.encode("utf-8") if isinstance(value, str) else value
        store_key = format_key(key)
        self._store.put(store_key, raw)
        logger.info("Stored value", extra={"key": store_key, "size": len(raw)})

    def exists(self, key: str) -> bool:
        """Return whether a value is stored at exactly ``key``."""
        return self._store.exists(format_key(key))


def _log_report(prefix: str, report: MaterializeReport) -> None:
    if report.dropped:
        logger.warning(
            "Dropped keys without a usable name",
            extra={"prefix": prefix, "dropped": report.dropped, "count": len(report.dropped)},
        )
    if report.conflicts:
        logger.warning(
            "Values replaced by folders of the same name",
            extra={"prefix": prefix, "conflicts": report.conflicts, "count": len(report.conflicts)},
        )


__all__ = ["KeyValueConfiguration"]
