"""Configuration adapter - settings loading, display, overrides, and models.

Provides adapters for application settings using lib_layered_config.

Contents:
    * :mod:`.loader` - Layered settings loading with caching
    * :mod:`.display` - Settings display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
    * :mod:`.settings` - ``[tree]`` section model
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides
from .settings import TreeSettings, load_tree_settings

__all__ = [
    "TreeSettings",
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
    "load_tree_settings",
]
