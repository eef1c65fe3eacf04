"""Type-safe domain enums for output formats and conflict handling."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration and tree display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable output (TOML-like settings, rich tree).
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ConflictPolicy(str, Enum):
    """How materialization treats a path that is both a value and a folder.

    Attributes:
        LAST_WRITE_WINS: The folder replaces the value; the loss is reported.
        STRICT: Raise ``KeyConflictError`` instead.

    Example:
        >>> ConflictPolicy("strict") is ConflictPolicy.STRICT
        True
        >>> ConflictPolicy.LAST_WRITE_WINS.value
        'last-write-wins'
    """

    LAST_WRITE_WINS = "last-write-wins"
    STRICT = "strict"


__all__ = [
    "ConflictPolicy",
    "OutputFormat",
]
