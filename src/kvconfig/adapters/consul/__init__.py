"""Consul adapter - KV store over the Consul HTTP API.

Contents:
    * :mod:`.settings` - ConsulSettings model and loader
    * :mod:`.store` - ConsulKeyValueStore and the open_consul_store factory
"""

from __future__ import annotations

from .settings import ConsulSettings, load_consul_settings
from .store import ConsulKeyValueStore, open_consul_store

__all__ = [
    "ConsulKeyValueStore",
    "ConsulSettings",
    "load_consul_settings",
    "open_consul_store",
]
