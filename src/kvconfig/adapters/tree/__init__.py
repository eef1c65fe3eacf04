"""Tree rendering adapter - Rich and JSON output of materialized trees."""

from __future__ import annotations

from .display import build_rich_tree, render_tree, tree_to_json

__all__ = [
    "build_rich_tree",
    "render_tree",
    "tree_to_json",
]
