"""Consul KV store adapter over the HTTP API.

Talks to ``/v1/kv/<key>`` with httpx and decodes the JSON listing with
orjson. Values arrive base64-encoded; a ``null`` value (folder markers,
empty writes) decodes to ``b""``.

Contents:
    * :class:`ConsulKeyValueStore` - KeyValueStore implementation.
    * :func:`open_consul_store` - Build a store from layered configuration.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import quote

import httpx
import orjson

from kvconfig.domain.errors import BackendError, KeyNotFoundError

from .settings import ConsulSettings, load_consul_settings

if TYPE_CHECKING:
    from types import TracebackType

    from lib_layered_config import Config

logger = logging.getLogger(__name__)

_HTTP_NOT_FOUND = 404
_TOKEN_HEADER = "X-Consul-Token"


class ConsulKeyValueStore:
    """KeyValueStore backed by a Consul agent.

    Args:
        settings: Validated connection settings.
        transport: Optional httpx transport, used by tests to stub the agent.

    Example:
        >>> def handler(request: httpx.Request) -> httpx.Response:
        ...     return httpx.Response(200, json=[{"Key": "app/name", "Value": "ZGVtbw=="}])
        >>> with ConsulKeyValueStore(ConsulSettings(), transport=httpx.MockTransport(handler)) as store:
        ...     store.get("app/name")
        b'demo'
    """

    def __init__(self, settings: ConsulSettings, *, transport: httpx.BaseTransport | None = None) -> None:
        headers = {_TOKEN_HEADER: settings.token} if settings.token else {}
        self._settings = settings
        self._params: dict[str, str] = {"dc": settings.datacenter} if settings.datacenter else {}
        self._client = httpx.Client(
            base_url=f"{settings.address}/v1/kv/",
            headers=headers,
            timeout=settings.timeout,
            verify=settings.verify,
            transport=transport,
        )

    def __enter__(self) -> ConsulKeyValueStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def get(self, key: str) -> bytes:
        """Return the value stored at ``key``.

        Raises:
            KeyNotFoundError: When the agent answers 404.
            BackendError: On transport failures or unexpected payloads.
        """
        response = self._request("GET", key)
        if response.status_code == _HTTP_NOT_FOUND:
            raise KeyNotFoundError(key)
        entries = _decode_entries(response)
        if not entries:
            raise KeyNotFoundError(key)
        return entries[0][1]

    def list(self, prefix: str) -> list[tuple[str, bytes]]:
        """Return all ``(key, value)`` pairs whose key starts with ``prefix``.

        Raises:
            KeyNotFoundError: When nothing is stored under the prefix.
            BackendError: On transport failures or unexpected payloads.
        """
        response = self._request("GET", prefix, params={"recurse": "true"})
        if response.status_code == _HTTP_NOT_FOUND:
            raise KeyNotFoundError(prefix)
        return _decode_entries(response)

    def put(self, key: str, value: bytes) -> None:
        """Write ``value`` at ``key``.

        Raises:
            BackendError: When the agent rejects the write.
        """
        response = self._request("PUT", key, content=value)
        if response.status_code == _HTTP_NOT_FOUND or response.content.strip() != b"true":
            raise BackendError(f"Consul rejected write to {key!r}: HTTP {response.status_code}")

    def exists(self, key: str) -> bool:
        """Return whether a value is stored at exactly ``key``."""
        response = self._request("GET", key)
        return response.status_code != _HTTP_NOT_FOUND

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def _request(
        self,
        method: str,
        key: str,
        *,
        params: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Send one request; 404 is returned to the caller, other errors raise."""
        query = {**self._params, **(params or {})}
        try:
            response = self._client.request(method, _key_path(key), params=query, content=content)
        except httpx.TimeoutException as exc:
            raise BackendError(f"Consul request timed out after {self._settings.timeout}s: {method} {key!r}") from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Consul request failed: {exc}") from exc

        logger.debug("Consul response", extra={"method": method, "key": key, "status": response.status_code})
        if response.status_code == _HTTP_NOT_FOUND:
            return response
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = response.text.strip()
            raise BackendError(f"Consul returned HTTP {response.status_code} for {method} {key!r}: {detail}") from exc
        return response


def _key_path(key: str) -> str:
    """Percent-encode ``key`` for the URL path, escaping dot segments.

    Example:
        >>> _key_path("app/../secret file")
        'app/%2E%2E/secret%20file'
        >>> _key_path("app/./")
        'app/%2E/'
    """
    segments = key.split("/")
    return "/".join("%2E" * len(s) if s in (".", "..") else quote(s, safe="") for s in segments)


def _decode_entries(response: httpx.Response) -> list[tuple[str, bytes]]:
    """Decode a Consul KV JSON listing into ``(key, value)`` pairs.

    Example:
        >>> _decode_entries(httpx.Response(200, json=[{"Key": "a/", "Value": None}]))
        [('a/', b'')]
    """
    try:
        payload: Any = orjson.loads(response.content)
    except orjson.JSONDecodeError as exc:
        raise BackendError("Consul returned a non-JSON KV listing") from exc
    if not isinstance(payload, list):
        raise BackendError(f"Consul returned {type(payload).__name__} instead of a KV listing")

    entries: list[tuple[str, bytes]] = []
    for item in cast("list[Any]", payload):
        if not isinstance(item, dict) or "Key" not in item:
            raise BackendError("Consul KV entry without a Key field")
        entry = cast("dict[str, Any]", item)
        encoded = entry.get("Value")
        try:
            value = base64.b64decode(encoded, validate=True) if encoded else b""
        except (binascii.Error, TypeError) as exc:
            raise BackendError(f"Consul value for {entry['Key']!r} is not valid base64") from exc
        entries.append((str(entry["Key"]), value))
    return entries


def open_consul_store(config: Config) -> ConsulKeyValueStore:
    """Build a ConsulKeyValueStore from the ``[consul]`` section of ``config``.

    Raises:
        ConfigurationError: When the section holds invalid values.
    """
    settings = load_consul_settings(config.as_dict())
    logger.debug(
        "Opening Consul store",
        extra={"address": settings.address, "datacenter": settings.datacenter, "timeout": settings.timeout},
    )
    return ConsulKeyValueStore(settings)


__all__ = [
    "ConsulKeyValueStore",
    "open_consul_store",
]
