"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values
instead of a bare ``1``. Signal codes (130, 141, 143) are informational;
``lib_cli_exit_tools`` translates signals itself.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by kvconfig.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno where applicable.

    * 0–1: success / generic failure (also "key absent" for ``exists``)
    * 2: ENOENT, key or prefix not found
    * 22: EINVAL, invalid argument
    * 65: EX_DATAERR, stored keys conflict under the strict policy
    * 69: EX_UNAVAILABLE, Consul unreachable or failing
    * 78: EX_CONFIG, invalid settings
    * 128+N: signal N (informational only)

    Example:
        >>> int(ExitCode.BACKEND_UNAVAILABLE)
        69
        >>> ExitCode.KEY_NOT_FOUND
        <ExitCode.KEY_NOT_FOUND: 2>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    KEY_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    DATA_ERROR = 65
    BACKEND_UNAVAILABLE = 69
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
