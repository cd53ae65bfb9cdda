"""prefwrap - typed preference accessors over a key-value store."""

from prefwrap.config import (
    StoreConfig,
    build_store,
    get_standard_store,
    reset_standard_store,
    set_standard_store,
)
from prefwrap.infra.memory.store import InMemoryStore
from prefwrap.ports.store_port import StorePort
from prefwrap.preference import Strategy, TypedPreference

__all__ = [
    "InMemoryStore",
    "StoreConfig",
    "StorePort",
    "Strategy",
    "TypedPreference",
    "build_store",
    "get_standard_store",
    "reset_standard_store",
    "set_standard_store",
]
