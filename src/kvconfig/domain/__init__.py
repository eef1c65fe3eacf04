"""Domain layer - pure key and tree logic with no I/O or framework dependencies.

Contents:
    * :mod:`.keys` - Key normalization (leading separators, request prefixes)
    * :mod:`.tree` - Flat listing to nested tree materialization
    * :mod:`.enums` - Domain enumerations (OutputFormat, ConflictPolicy)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import ConflictPolicy, OutputFormat
from .errors import BackendError, ConfigurationError, KeyConflictError, KeyNotFoundError
from .keys import SEPARATOR, format_key, join_path, strip_request_key
from .tree import Item, Leaf, MaterializeReport, Tree, flatten, materialize, to_plain

__all__ = [
    # Keys
    "SEPARATOR",
    "format_key",
    "join_path",
    "strip_request_key",
    # Tree
    "Item",
    "Leaf",
    "MaterializeReport",
    "Tree",
    "flatten",
    "materialize",
    "to_plain",
    # Enums
    "ConflictPolicy",
    "OutputFormat",
    # Errors
    "BackendError",
    "ConfigurationError",
    "KeyConflictError",
    "KeyNotFoundError",
]
