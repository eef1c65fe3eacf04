"""Public package surface exposing tree materialization and wiring.

Routes imports through the architectural layers:
- Domain exports: key normalization and tree materialization
- Application exports: KeyValueConfiguration use case
- Composition exports: wired adapter services
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.configuration import KeyValueConfiguration

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain.enums import ConflictPolicy
from .domain.errors import BackendError, ConfigurationError, KeyConflictError, KeyNotFoundError
from .domain.keys import format_key, strip_request_key
from .domain.tree import Leaf, MaterializeReport, Tree, flatten, materialize, to_plain

__all__ = [
    "BackendError",
    "ConfigurationError",
    "ConflictPolicy",
    "KeyConflictError",
    "KeyNotFoundError",
    "KeyValueConfiguration",
    "Leaf",
    "MaterializeReport",
    "Tree",
    "flatten",
    "format_key",
    "get_config",
    "materialize",
    "print_info",
    "strip_request_key",
    "to_plain",
]
