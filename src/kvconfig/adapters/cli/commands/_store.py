"""Shared store session handling for the key-value commands.

Internal module (underscore prefix). Opens the configured store, wraps it in
the KeyValueConfiguration use case, and maps domain errors onto exit codes.

Contents:
    * :func:`store_session` - Context manager yielding a KeyValueConfiguration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import rich_click as click

from kvconfig import __init__conf__
from kvconfig.adapters.config.settings import load_tree_settings
from kvconfig.application.configuration import KeyValueConfiguration
from kvconfig.domain.errors import BackendError, ConfigurationError, KeyConflictError, KeyNotFoundError

from ..context import CLIContext
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def fail(message: str, code: ExitCode, exc: BaseException | None = None) -> NoReturn:
    """Log, print ``message`` to stderr, and exit with ``code``."""
    logger.error(message, extra={"exit_code": int(code), "error_type": type(exc).__name__ if exc else None})
    click.echo(f"\nError: {message}", err=True)
    raise SystemExit(code) from exc


@contextmanager
def store_session(cli_ctx: CLIContext) -> Iterator[KeyValueConfiguration]:
    """Yield a KeyValueConfiguration over the configured store.

    The store is closed on exit. Errors raised inside the block become
    ``SystemExit`` with the matching :class:`ExitCode`:

    * invalid ``[consul]``/``[tree]`` settings → CONFIG_ERROR
    * missing key or empty prefix → KEY_NOT_FOUND
    * leaf/folder conflict under the strict policy → DATA_ERROR
    * Consul unreachable or failing → BACKEND_UNAVAILABLE
    """
    try:
        tree_settings = load_tree_settings(cli_ctx.config.as_dict())
        store = cli_ctx.services.open_store(cli_ctx.config)
    except ConfigurationError as exc:
        click.echo(f"See: {__init__conf__.shell_command} config", err=True)
        fail(str(exc), ExitCode.CONFIG_ERROR, exc)

    try:
        yield KeyValueConfiguration(store, policy=tree_settings.conflict_policy)
    except KeyNotFoundError as exc:
        fail(str(exc), ExitCode.KEY_NOT_FOUND, exc)
    except KeyConflictError as exc:
        fail(f"{exc}. Pass --no-strict to let the folder win.", ExitCode.DATA_ERROR, exc)
    except BackendError as exc:
        fail(str(exc), ExitCode.BACKEND_UNAVAILABLE, exc)
    finally:
        store.close()


__all__ = [
    "fail",
    "store_session",
]
