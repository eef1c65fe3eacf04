"""Key-value CLI commands: read, materialize, write, and check keys.

Contents:
    * :func:`cli_get` - Print one value.
    * :func:`cli_tree` - Materialize a prefix into a tree and render it.
    * :func:`cli_put` - Write one value.
    * :func:`cli_exists` - Check a key; exit status reports the answer.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from kvconfig.domain.enums import ConflictPolicy, OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode
from ._store import store_session

logger = logging.getLogger(__name__)


def _require_key(key: str) -> None:
    """Exit with INVALID_ARGUMENT when ``key`` names the store root."""
    if not key.strip("/"):
        click.echo("\nError: KEY must name something below the root", err=True)
        raise SystemExit(ExitCode.INVALID_ARGUMENT)


@click.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option("--raw", is_flag=True, default=False, help="Write the stored bytes unchanged (no decoding, no newline)")
@click.pass_context
def cli_get(ctx: click.Context, key: str, raw: bool) -> None:
    """Print the value stored at KEY."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-get", extra={"command": "get", "key": key}):
        _require_key(key)
        with store_session(cli_ctx) as configuration:
            value = configuration.get(key)
        if raw:
            click.echo(value, nl=False)
        else:
            click.echo(value.decode("utf-8", errors="backslashreplace"))


@click.command("tree", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("prefix", default="")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (rich tree or JSON)",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail when a key is both a value and a folder. Default: tree.conflict_policy setting.",
)
@click.pass_context
def cli_tree(ctx: click.Context, prefix: str, output_format: str, strict: bool | None) -> None:
    r"""Materialize every key under PREFIX into a nested tree.

    \b
    Keys are split on '/'; each segment becomes a folder and the last one
    holds the value. Leading slashes are ignored. Without PREFIX the whole
    store is shown.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    extra = {"command": "tree", "prefix": prefix, "format": fmt.value}

    with lib_log_rich.runtime.bind(job_id="cli-tree", extra=extra):
        with store_session(cli_ctx) as configuration:
            policy = None if strict is None else (ConflictPolicy.STRICT if strict else ConflictPolicy.LAST_WRITE_WINS)
            tree = configuration.get_recursive(prefix, policy=policy)
        logger.info("Materialized tree", extra={"prefix": prefix, "top_level": len(tree)})
        cli_ctx.services.render_tree(tree, output_format=fmt, title=prefix or "/")


@click.command("put", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.argument("value")
@click.pass_context
def cli_put(ctx: click.Context, key: str, value: str) -> None:
    """Store VALUE (UTF-8) at KEY, replacing any previous value."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-put", extra={"command": "put", "key": key}):
        _require_key(key)
        with store_session(cli_ctx) as configuration:
            configuration.put(key, value)
        click.echo(f"Stored {key}")


@click.command("exists", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.pass_context
def cli_exists(ctx: click.Context, key: str) -> None:
    """Print 'true' and exit 0 when KEY holds a value, else 'false' and exit 1."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-exists", extra={"command": "exists", "key": key}):
        _require_key(key)
        with store_session(cli_ctx) as configuration:
            present = configuration.exists(key)
        click.echo("true" if present else "false")
        if not present:
            raise SystemExit(ExitCode.GENERAL_ERROR)


__all__ = [
    "cli_exists",
    "cli_get",
    "cli_put",
    "cli_tree",
]
