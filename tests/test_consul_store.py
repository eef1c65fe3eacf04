"""Consul store stories against a stubbed HTTP agent.

Uses ``httpx.MockTransport`` so every request is answered in-process and
can be inspected.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from typing import Any

import httpx
import orjson
import pytest
from lib_layered_config import Config

from kvconfig.adapters.consul import ConsulKeyValueStore, ConsulSettings, open_consul_store
from kvconfig.domain.errors import BackendError, ConfigurationError, KeyNotFoundError

Handler = Callable[[httpx.Request], httpx.Response]


def _entry(key: str, value: bytes | None) -> dict[str, object]:
    return {
        "Key": key,
        "Value": base64.b64encode(value).decode("ascii") if value is not None else None,
        "Flags": 0,
        "CreateIndex": 1,
        "ModifyIndex": 1,
    }


class FakeAgent:
    """Minimal Consul KV agent keeping entries in a dict and recording requests."""

    def __init__(self, entries: dict[str, bytes | None] | None = None) -> None:
        self.entries: dict[str, bytes | None] = dict(entries or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.path.removeprefix("/v1/kv/")
        if request.method == "PUT":
            self.entries[key] = request.content
            return httpx.Response(200, content=b"true")
        if request.url.params.get("recurse") is not None:
            found = [_entry(k, v) for k, v in self.entries.items() if k.startswith(key)]
        else:
            found = [_entry(key, self.entries[key])] if key in self.entries else []
        if not found:
            return httpx.Response(404)
        return httpx.Response(200, content=orjson.dumps(found))


def _store(handler: Handler, **settings: object) -> ConsulKeyValueStore:
    return ConsulKeyValueStore(ConsulSettings(**settings), transport=httpx.MockTransport(handler))  # type: ignore[arg-type]


# ======================== Reads ========================


@pytest.mark.os_agnostic
def test_get_decodes_the_base64_value() -> None:
    agent = FakeAgent({"app/db/port": b"5432"})

    with _store(agent) as store:
        assert store.get("app/db/port") == b"5432"

    assert agent.requests[0].url.path == "/v1/kv/app/db/port"


@pytest.mark.os_agnostic
def test_get_missing_key_raises_not_found() -> None:
    with _store(FakeAgent()) as store, pytest.raises(KeyNotFoundError) as exc_info:
        store.get("app/missing")

    assert exc_info.value.key == "app/missing"


@pytest.mark.os_agnostic
def test_get_null_value_returns_empty_bytes() -> None:
    with _store(FakeAgent({"app/feature/": None})) as store:
        assert store.get("app/feature/") == b""


@pytest.mark.os_agnostic
def test_list_requests_recursion_and_returns_absolute_keys() -> None:
    agent = FakeAgent({"app/name": b"demo", "app/db/host": b"localhost", "other/key": b"x"})

    with _store(agent) as store:
        listed = store.list("app/")

    assert dict(listed) == {"app/name": b"demo", "app/db/host": b"localhost"}
    assert agent.requests[0].url.params["recurse"] == "true"


@pytest.mark.os_agnostic
def test_list_with_nothing_below_the_prefix_raises_not_found() -> None:
    with _store(FakeAgent({"app/name": b"demo"})) as store, pytest.raises(KeyNotFoundError):
        store.list("missing/")


@pytest.mark.os_agnostic
def test_list_with_empty_prefix_hits_the_kv_root() -> None:
    agent = FakeAgent({"app/name": b"demo"})

    with _store(agent) as store:
        store.list("")

    assert agent.requests[0].url.path == "/v1/kv/"


@pytest.mark.os_agnostic
def test_exists_follows_the_status_code() -> None:
    with _store(FakeAgent({"app/name": b"demo"})) as store:
        assert store.exists("app/name") is True
        assert store.exists("app/other") is False


# ======================== Writes ========================


@pytest.mark.os_agnostic
def test_put_sends_raw_bytes() -> None:
    agent = FakeAgent()

    with _store(agent) as store:
        store.put("app/name", b"demo")

    assert agent.entries == {"app/name": b"demo"}
    assert agent.requests[0].method == "PUT"


@pytest.mark.os_agnostic
def test_put_rejected_by_the_agent_raises_backend_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"false")

    with _store(refuse) as store, pytest.raises(BackendError, match="rejected write"):
        store.put("app/locked", b"x")


# ======================== Request shaping ========================


@pytest.mark.os_agnostic
def test_token_is_sent_as_header() -> None:
    agent = FakeAgent({"app/name": b"demo"})

    with _store(agent, token="s3cr3t") as store:
        store.get("app/name")

    assert agent.requests[0].headers["X-Consul-Token"] == "s3cr3t"


@pytest.mark.os_agnostic
def test_no_token_sends_no_header() -> None:
    agent = FakeAgent({"app/name": b"demo"})

    with _store(agent) as store:
        store.get("app/name")

    assert "X-Consul-Token" not in agent.requests[0].headers


@pytest.mark.os_agnostic
def test_datacenter_is_sent_on_every_request() -> None:
    agent = FakeAgent({"app/name": b"demo"})

    with _store(agent, datacenter="dc2") as store:
        store.get("app/name")
        store.list("app/")

    assert [r.url.params["dc"] for r in agent.requests] == ["dc2", "dc2"]


@pytest.mark.os_agnostic
def test_keys_are_percent_encoded_but_separators_kept() -> None:
    agent = FakeAgent()

    with _store(agent) as store:
        store.exists("app/with space")

    assert agent.requests[0].url.raw_path.startswith(b"/v1/kv/app/with%20space")


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("key", "raw_path"),
    [
        ("app/../secret", b"/v1/kv/app/%2E%2E/secret"),
        ("app/./name", b"/v1/kv/app/%2E/name"),
        ("..", b"/v1/kv/%2E%2E"),
    ],
)
def test_dot_segments_reach_the_agent_unresolved(key: str, raw_path: bytes) -> None:
    agent = FakeAgent()

    with _store(agent) as store:
        store.exists(key)
        store.put(key, b"v")
        assert store.get(key) == b"v"

    assert [r.url.raw_path for r in agent.requests] == [raw_path, raw_path, raw_path]


# ======================== Failures ========================


@pytest.mark.os_agnostic
def test_server_error_raises_backend_error_with_status() -> None:
    def broken(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="rpc error: No cluster leader")

    with _store(broken) as store, pytest.raises(BackendError, match="HTTP 500") as exc_info:
        store.list("app/")

    assert "No cluster leader" in str(exc_info.value)


@pytest.mark.os_agnostic
def test_forbidden_raises_backend_error() -> None:
    def forbidden(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="Permission denied")

    with _store(forbidden) as store, pytest.raises(BackendError, match="HTTP 403"):
        store.get("app/name")


@pytest.mark.os_agnostic
def test_connection_failure_raises_backend_error() -> None:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with _store(unreachable) as store, pytest.raises(BackendError, match="Connection refused") as exc_info:
        store.get("app/name")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.os_agnostic
def test_timeout_raises_backend_error_naming_the_timeout() -> None:
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _store(slow, timeout=1.5) as store, pytest.raises(BackendError, match="1.5s"):
        store.get("app/name")


@pytest.mark.os_agnostic
def test_non_json_listing_raises_backend_error() -> None:
    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with _store(garbage) as store, pytest.raises(BackendError, match="non-JSON"):
        store.list("app/")


@pytest.mark.os_agnostic
def test_invalid_base64_raises_backend_error() -> None:
    def corrupt(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=orjson.dumps([{"Key": "app/name", "Value": "!!!"}]))

    with _store(corrupt) as store, pytest.raises(BackendError, match="base64"):
        store.get("app/name")


@pytest.mark.os_agnostic
def test_listing_that_is_not_a_list_raises_backend_error() -> None:
    def wrong_shape(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=orjson.dumps({"Key": "app/name"}))

    with _store(wrong_shape) as store, pytest.raises(BackendError, match="instead of a KV listing"):
        store.list("app/")


# ======================== Factory ========================


@pytest.mark.os_agnostic
def test_open_consul_store_reads_the_consul_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    store = open_consul_store(config_factory({"consul": {"address": "http://consul.test:8500", "timeout": 3}}))
    try:
        assert isinstance(store, ConsulKeyValueStore)
    finally:
        store.close()


@pytest.mark.os_agnostic
def test_open_consul_store_rejects_invalid_settings(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    with pytest.raises(ConfigurationError, match="Invalid consul settings"):
        open_consul_store(config_factory({"consul": {"address": "consul.test:8500"}}))
