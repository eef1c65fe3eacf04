"""Render materialized trees for the terminal or as JSON.

Human output uses a Rich tree with folders first and names sorted; JSON
output decodes leaves to strings and sorts keys so the result is stable
across store listing orders.
"""

from __future__ import annotations

import click
import lib_log_rich.runtime
import orjson
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree as RichTree

from kvconfig.domain.enums import OutputFormat
from kvconfig.domain.tree import Leaf, Tree, to_plain


def tree_to_json(tree: Tree) -> str:
    """Serialize ``tree`` to indented JSON with sorted keys.

    Example:
        >>> print(tree_to_json({"db": {"port": Leaf(b"5432")}}))
        {
          "db": {
            "port": "5432"
          }
        }
    """
    return orjson.dumps(to_plain(tree), option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode("utf-8")


def build_rich_tree(tree: Tree, title: str = "/") -> RichTree:
    """Build a Rich tree; folders are listed before values."""
    root = RichTree(f"[bold]{escape(title)}[/bold]")
    _add_children(root, tree)
    return root


def _add_children(node: RichTree, tree: Tree) -> None:
    for name, item in sorted(tree.items(), key=lambda entry: (isinstance(entry[1], Leaf), entry[0])):
        if isinstance(item, Leaf):
            node.add(f"{escape(name)} = [green]{escape(item.text(errors='backslashreplace'))}[/green]")
        else:
            _add_children(node.add(f"[bold blue]{escape(name)}/[/bold blue]"), item)


def render_tree(
    tree: Tree,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    title: str = "/",
    console: Console | None = None,
) -> None:
    """Print ``tree`` in the requested format.

    Args:
        tree: Materialized tree.
        output_format: Rich tree for humans or JSON.
        title: Root label for human output, usually the requested prefix.
        console: Rich console override, mainly for tests.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    if output_format is OutputFormat.JSON:
        click.echo(tree_to_json(tree))
        return
    (console or Console()).print(build_rich_tree(tree, title))


__all__ = [
    "build_rich_tree",
    "render_tree",
    "tree_to_json",
]
