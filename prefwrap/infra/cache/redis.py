"""Redis implementation of StorePort for shared preferences.

- One Redis string per preference key, optional key prefix
- Values stored as JSON envelopes (prefwrap.infra.codec)
- Connection failures logged as structured errors, raised as StoreUnavailableError
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from prefwrap.infra.codec import decode_value, encode_value, ensure_storable
from prefwrap.ports.store_port import StorePort
from prefwrap.shared.errors import StoredValueDecodeError, StoreUnavailableError
from prefwrap.shared.logging.error_handler import log_structured_error

if TYPE_CHECKING:
    from prefwrap.shared.types import StoredValue

logger = logging.getLogger(__name__)

_UNAVAILABLE = (RedisConnectionError, RedisTimeoutError)


class RedisStore(StorePort):
    """Redis store implementing the StorePort interface.

    The client is created on first use, so constructing the store performs
    no network I/O.
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", key_prefix: str = "") -> None:
        self._redis_url = redis_url
        self._key_prefix = key_prefix
        self._client: redis.Redis | None = None

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(self._redis_url, decode_responses=False)
        return self._client

    def _full_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def _unavailable(self, exc: Exception, key: str, op: str) -> StoreUnavailableError:
        log_structured_error(
            logger,
            exc,
            error_code="STORE_UNAVAILABLE",
            store="redis",
            key=key,
            context={"operation": op, "redis_url": self._redis_url},
        )
        return StoreUnavailableError("RedisStore", f"Redis unavailable during {op}: {exc}")

    def read(self, key: str) -> StoredValue | None:
        """Retrieve a value by key, returning None if absent or undecodable."""
        try:
            raw = self._get_client().get(self._full_key(key))
        except _UNAVAILABLE as exc:
            raise self._unavailable(exc, key, "read") from exc
        if raw is None:
            return None
        try:
            return decode_value(raw)
        except StoredValueDecodeError as exc:
            logger.warning("Ignoring undecodable Redis value for %r: %s", key, exc)
            return None

    def write(self, key: str, value: StoredValue) -> None:
        """Store a value, overwriting any previous one."""
        ensure_storable(value)
        try:
            self._get_client().set(self._full_key(key), encode_value(value))
        except _UNAVAILABLE as exc:
            raise self._unavailable(exc, key, "write") from exc

    def delete(self, key: str) -> None:
        """Delete a value by key (no-op if absent)."""
        try:
            self._get_client().delete(self._full_key(key))
        except _UNAVAILABLE as exc:
            raise self._unavailable(exc, key, "delete") from exc

    def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
