"""Key normalization between caller-facing keys and store-native keys."""

from __future__ import annotations

SEPARATOR = "/"


def format_key(key: str) -> str:
    """Return ``key`` without leading separators.

    The store never receives a key starting with ``/``.

    Example:
        >>> format_key("/app/db")
        'app/db'
        >>> format_key("///")
        ''
        >>> format_key("app/")
        'app/'
    """
    return key.lstrip(SEPARATOR)


def strip_request_key(request_key: str, response_key: str) -> str:
    """Remove the echoed ``request_key`` prefix from a listed key.

    Keys that do not start with ``request_key`` come back unchanged; the
    materializer copes with whatever remains.

    Example:
        >>> strip_request_key("app/", "app/db/host")
        'db/host'
        >>> strip_request_key("app", "app/db/host")
        '/db/host'
        >>> strip_request_key("other/", "app/db/host")
        'app/db/host'
    """
    if request_key and response_key.startswith(request_key):
        return response_key[len(request_key) :]
    return response_key


def join_path(parent: str, segment: str) -> str:
    """Join a parent path and a segment with the separator.

    Example:
        >>> join_path("", "app")
        'app'
        >>> join_path("app", "db")
        'app/db'
    """
    return f"{parent}{SEPARATOR}{segment}" if parent else segment


__all__ = [
    "SEPARATOR",
    "format_key",
    "join_path",
    "strip_request_key",
]
