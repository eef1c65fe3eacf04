"""In-memory tree rendering adapter for testing.

Contents:
    * :class:`TreeSpy` - Captures render calls for test assertions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...domain.enums import OutputFormat
from ...domain.tree import Tree


def _empty_render_list() -> list[dict[str, Any]]:
    """Create an empty typed list for render records."""
    return []


@dataclass
class TreeSpy:
    """Records rendered trees instead of printing them.

    Each test should create its own TreeSpy to avoid cross-test pollution.

    Example:
        >>> spy = TreeSpy()
        >>> spy.render_tree({}, title="app/")
        >>> spy.rendered[0]["title"]
        'app/'
    """

    rendered: list[dict[str, Any]] = field(default_factory=_empty_render_list)

    def render_tree(
        self,
        tree: Tree,
        *,
        output_format: OutputFormat = OutputFormat.HUMAN,
        title: str = "/",
    ) -> None:
        """Record the call; matches the RenderTree protocol."""
        self.rendered.append({"tree": tree, "output_format": output_format, "title": title})

    @property
    def last_tree(self) -> Tree:
        """Tree passed to the most recent render call."""
        return self.rendered[-1]["tree"]


__all__ = ["TreeSpy"]
