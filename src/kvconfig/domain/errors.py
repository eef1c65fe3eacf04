"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete application settings.

    Raised when the ``[consul]`` or ``[tree]`` sections hold values that
    cannot be parsed. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from kvconfig.domain.errors import ConfigurationError
        >>> err = ConfigurationError("consul.timeout must be positive")
        >>> str(err)
        'consul.timeout must be positive'
    """


class BackendError(Exception):
    """The key-value store could not be reached or answered unexpectedly.

    Wraps transport failures, unexpected HTTP status codes, and undecodable
    payloads. The original exception is kept in the chain.

    Example:
        >>> from kvconfig.domain.errors import BackendError
        >>> err = BackendError("Connection refused by 127.0.0.1:8500")
        >>> str(err)
        'Connection refused by 127.0.0.1:8500'
    """


class KeyNotFoundError(LookupError):
    """No entry exists for a key, or a listing under a prefix came back empty.

    Inherits from LookupError so generic ``except LookupError`` handlers
    catch it.

    Example:
        >>> from kvconfig.domain.errors import KeyNotFoundError
        >>> err = KeyNotFoundError("app/db/host")
        >>> err.key
        'app/db/host'
        >>> str(err)
        'Key not found: app/db/host'
        >>> isinstance(err, LookupError)
        True
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Key not found: {key}")
        self.key = key


class KeyConflictError(ValueError):
    """A path is both a leaf and the prefix of other keys.

    Raised only when materializing with ``ConflictPolicy.STRICT``.

    Example:
        >>> from kvconfig.domain.errors import KeyConflictError
        >>> err = KeyConflictError("app/db")
        >>> err.path
        'app/db'
        >>> str(err)
        "Key 'app/db' is both a value and a folder"
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Key {path!r} is both a value and a folder")
        self.path = path


__all__ = [
    "BackendError",
    "ConfigurationError",
    "KeyConflictError",
    "KeyNotFoundError",
]
