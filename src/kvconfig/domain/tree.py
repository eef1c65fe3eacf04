"""Materialize flat ``/``-delimited key listings into nested trees.

The store hands back ``(key, value)`` pairs in no particular order. This
module groups them by their first path segment and recurses until every
key has been reduced to a leaf name.

Contents:
    * :class:`Leaf` - Raw stored value at a terminal path.
    * :class:`MaterializeReport` - Dropped keys and leaf/folder conflicts.
    * :func:`materialize` - Flat pairs to nested tree.
    * :func:`flatten` - Nested tree back to flat pairs.
    * :func:`to_plain` - Tree with leaves decoded to ``str``.

System Role:
    Pure domain logic. No I/O, no logging; diagnostics are returned through
    the report so callers decide how to surface them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from .enums import ConflictPolicy
from .errors import KeyConflictError
from .keys import SEPARATOR, join_path

Tree: TypeAlias = "dict[str, Item]"
Item: TypeAlias = "Leaf | Tree"


@dataclass(frozen=True, slots=True)
class Leaf:
    """Opaque stored value found at a terminal path.

    Example:
        >>> Leaf(b"5432").text()
        '5432'
        >>> Leaf(b"5432") == Leaf(b"5432")
        True
    """

    value: bytes

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Decode the raw value."""
        return self.value.decode(encoding, errors)


def _empty_path_list() -> list[str]:
    """Create an empty typed list for report entries."""
    return []


@dataclass
class MaterializeReport:
    """Diagnostics collected while materializing a listing.

    Attributes:
        dropped: Full paths of keys that reduced to nothing after separator
            stripping (``"////"``, folder markers such as ``"app/"``).
        conflicts: Full paths whose value was replaced by a folder of the
            same name.

    Example:
        >>> report = MaterializeReport()
        >>> _ = materialize([("////", b"x")], report=report)
        >>> report.dropped
        ['////']
        >>> report.is_clean
        False
    """

    dropped: list[str] = field(default_factory=_empty_path_list)
    conflicts: list[str] = field(default_factory=_empty_path_list)

    @property
    def is_clean(self) -> bool:
        """True when nothing was dropped or replaced."""
        return not self.dropped and not self.conflicts


def materialize(
    pairs: Iterable[tuple[str, bytes]],
    *,
    policy: ConflictPolicy = ConflictPolicy.LAST_WRITE_WINS,
    report: MaterializeReport | None = None,
) -> Tree:
    """Group relative ``(key, value)`` pairs into a nested tree.

    Keys without a separator become leaves; keys with one are grouped under
    their first segment and materialized recursively. Leading separators are
    stripped first and keys that end up empty are dropped.

    A duplicate leaf key keeps the value of the later pair. When a name is
    both a leaf and a folder on the same level, the folder is inserted last
    and replaces the leaf, unless ``policy`` is ``STRICT``.

    Args:
        pairs: Keys relative to the requested prefix with their raw values.
        policy: Leaf/folder conflict handling.
        report: Optional report receiving dropped keys and conflicts.

    Returns:
        Freshly built tree owned by the caller.

    Raises:
        KeyConflictError: Under ``ConflictPolicy.STRICT`` when a path is both
            a value and a folder.

    Example:
        >>> materialize([("a/b", b"v1"), ("a/c", b"v2")])
        {'a': {'b': Leaf(value=b'v1'), 'c': Leaf(value=b'v2')}}
        >>> materialize([("/x", b"v1")])
        {'x': Leaf(value=b'v1')}
        >>> materialize([])
        {}
    """
    return _materialize(pairs, "", policy, report if report is not None else MaterializeReport())


def _materialize(
    pairs: Iterable[tuple[str, bytes]],
    path: str,
    policy: ConflictPolicy,
    report: MaterializeReport,
) -> Tree:
    tree: Tree = {}
    groups: dict[str, list[tuple[str, bytes]]] = {}

    for raw_key, value in pairs:
        key = raw_key.lstrip(SEPARATOR)
        if not key:
            report.dropped.append(join_path(path, raw_key) if raw_key else path + SEPARATOR)
            continue
        segment, sep, remainder = key.partition(SEPARATOR)
        if not sep:
            tree[key] = Leaf(value)
        else:
            groups.setdefault(segment, []).append((remainder, value))

    for segment, group in groups.items():
        segment_path = join_path(path, segment)
        if segment in tree:
            if policy is ConflictPolicy.STRICT:
                raise KeyConflictError(segment_path)
            report.conflicts.append(segment_path)
        tree[segment] = _materialize(group, segment_path, policy, report)

    return tree


def flatten(tree: Tree, prefix: str = "") -> list[tuple[str, bytes]]:
    """Return the ``(path, value)`` pairs a tree was built from.

    Empty folders are emitted as folder markers (``"path/"`` with an empty
    value) so that materializing the result rebuilds them.

    Example:
        >>> flatten({"a": {"b": Leaf(b"1")}, "c": Leaf(b"2")})
        [('a/b', b'1'), ('c', b'2')]
        >>> flatten({"a": {}})
        [('a/', b'')]
    """
    pairs: list[tuple[str, bytes]] = []
    for name, item in tree.items():
        path = join_path(prefix, name)
        if isinstance(item, Leaf):
            pairs.append((path, item.value))
        elif item:
            pairs.extend(flatten(item, path))
        else:
            pairs.append((path + SEPARATOR, b""))
    return pairs


def to_plain(tree: Tree, encoding: str = "utf-8") -> dict[str, object]:
    """Convert a tree into nested dicts of decoded strings.

    Undecodable bytes are backslash-escaped rather than rejected.

    Example:
        >>> to_plain({"a": {"b": Leaf(b"v1")}, "raw": Leaf(b"\\xff")})
        {'a': {'b': 'v1'}, 'raw': '\\\\xff'}
    """
    plain: dict[str, object] = {}
    for name, item in tree.items():
        if isinstance(item, Leaf):
            plain[name] = item.text(encoding, errors="backslashreplace")
        else:
            plain[name] = to_plain(item, encoding)
    return plain


__all__ = [
    "Item",
    "Leaf",
    "MaterializeReport",
    "Tree",
    "flatten",
    "materialize",
    "to_plain",
]
