"""Store configuration and the process-wide standard store.

Configuration comes from environment variables:

    PREFWRAP_STORE_BACKEND  memory | file | redis   (default: file)
    PREFWRAP_FILE_PATH      JSON store path         (default: ~/.prefwrap/preferences.json)
    PREFWRAP_REDIS_URL      Redis URL               (default: redis://localhost:6379/0)
    PREFWRAP_KEY_PREFIX     Redis key prefix        (default: empty)

build_store() is the single composition point that instantiates a store.
The standard store is what a TypedPreference without an explicit store uses.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prefwrap.shared.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from prefwrap.ports.store_port import StorePort

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class StoreConfig:
    """Which store backend to build, and how."""

    backend: str = "file"
    file_path: Path | None = None
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StoreConfig:
        env = os.environ if environ is None else environ
        backend = env.get("PREFWRAP_STORE_BACKEND", "file").strip().lower() or "file"
        if backend not in BACKENDS:
            msg = f"PREFWRAP_STORE_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}"
            raise ConfigurationError(msg, setting="PREFWRAP_STORE_BACKEND")

        file_path_raw = env.get("PREFWRAP_FILE_PATH", "").strip()
        return cls(
            backend=backend,
            file_path=Path(file_path_raw).expanduser() if file_path_raw else None,
            redis_url=env.get("PREFWRAP_REDIS_URL", "redis://localhost:6379/0"),
            key_prefix=env.get("PREFWRAP_KEY_PREFIX", ""),
        )


def build_store(config: StoreConfig) -> StorePort:
    """Instantiate the store described by config. Performs no I/O."""
    if config.backend == "memory":
        from prefwrap.infra.memory.store import InMemoryStore

        return InMemoryStore()
    if config.backend == "file":
        from prefwrap.infra.file.json_store import JsonFileStore

        return JsonFileStore(config.file_path)
    if config.backend == "redis":
        from prefwrap.infra.cache.redis import RedisStore

        return RedisStore(redis_url=config.redis_url, key_prefix=config.key_prefix)

    msg = f"Unknown store backend: {config.backend!r}"
    raise ConfigurationError(msg, setting="backend")


_standard_store: StorePort | None = None
_standard_lock = threading.Lock()


def get_standard_store() -> StorePort:
    """Return the process-wide store, building it from the environment on first use."""
    global _standard_store
    with _standard_lock:
        if _standard_store is None:
            config = StoreConfig.from_env()
            _standard_store = build_store(config)
            logger.info("Standard preference store: %s backend", config.backend)
        return _standard_store


def set_standard_store(store: StorePort) -> None:
    global _standard_store
    with _standard_lock:
        _standard_store = store


def reset_standard_store() -> None:
    """Forget the standard store; the next access rebuilds it from the environment."""
    global _standard_store
    with _standard_lock:
        _standard_store = None
