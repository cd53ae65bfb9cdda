"""TypedPreference - typed read/write accessor over a StorePort.

A preference binds a key, a store and a Strategy at construction. The
strategy is fixed for the life of the instance and decides how values map
to the store:

    DIRECT                      primitive, default on any read anomaly
    DIRECT_NULLABLE             Optional[primitive], None on any read anomaly,
                                writing None deletes the key
    RAW_REPRESENTABLE           Enum stored by its int/str value, default on
                                any read anomaly (incl. unknown raw value)
    RAW_REPRESENTABLE_NULLABLE  Optional[Enum], None on any read anomaly,
                                writing None deletes the key

Reads never raise for a stored representation they cannot use; a missing
key, a value of the wrong shape and an unknown raw value all read exactly
like a key that was never written. Errors raised by the store propagate.

Usage:
    retry_count = TypedPreference.direct("retry_count", 0)
    retry_count.value = 5

    class Settings:
        theme = TypedPreference.raw("theme", Theme.LIGHT)
        nickname = TypedPreference.direct_nullable("nickname", str)
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import AnyUrl

from prefwrap.config import get_standard_store
from prefwrap.shared.errors import UnsupportedValueTypeError
from prefwrap.shared.types import PRIMITIVE_TYPES

if TYPE_CHECKING:
    from prefwrap.ports.store_port import StorePort
    from prefwrap.shared.types import StoredValue

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")
E = TypeVar("E", bound=enum.Enum)

_MISSING: Any = object()


class Strategy(enum.Enum):
    """How a preference maps its value to the store."""

    DIRECT = "direct"
    DIRECT_NULLABLE = "direct_nullable"
    RAW_REPRESENTABLE = "raw_representable"
    RAW_REPRESENTABLE_NULLABLE = "raw_representable_nullable"

    @property
    def nullable(self) -> bool:
        return self in (Strategy.DIRECT_NULLABLE, Strategy.RAW_REPRESENTABLE_NULLABLE)

    @property
    def raw(self) -> bool:
        return self in (Strategy.RAW_REPRESENTABLE, Strategy.RAW_REPRESENTABLE_NULLABLE)


def _primitive_type(value_type: object) -> type:
    """Resolve the primitive a DIRECT value type is stored as."""
    if isinstance(value_type, type) and not issubclass(value_type, enum.Enum):
        if issubclass(value_type, bytearray):
            return bytes
        for primitive in PRIMITIVE_TYPES:
            if issubclass(value_type, primitive):
                return primitive
    raise UnsupportedValueTypeError(value_type)


def _raw_type(enum_type: object) -> type:
    """Resolve the raw value type (int or str) of an enum."""
    if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
        raise UnsupportedValueTypeError(
            enum_type,
            f"Raw-representable preferences need an Enum type, got {enum_type!r}",
        )
    values = [member.value for member in enum_type]
    if values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return int
    if values and all(isinstance(v, str) for v in values):
        return str
    raise UnsupportedValueTypeError(
        enum_type,
        f"{enum_type.__name__} values must be all int or all str",
    )


def _cast(stored: object, target: type) -> Any:
    """Return stored as target, or _MISSING if the shape does not match."""
    if stored is None:
        return _MISSING
    if target is bool:
        return stored if isinstance(stored, bool) else _MISSING
    # bool never stands in for a number
    if isinstance(stored, bool):
        return _MISSING
    if target is int:
        return stored if isinstance(stored, int) else _MISSING
    if target is float:
        if isinstance(stored, (int, float)):
            try:
                return float(stored)
            except OverflowError:
                return _MISSING
        return _MISSING
    if target is str:
        return stored if isinstance(stored, str) else _MISSING
    if target is bytes:
        return bytes(stored) if isinstance(stored, (bytes, bytearray)) else _MISSING
    if target is AnyUrl:
        return stored if isinstance(stored, AnyUrl) else _MISSING
    return _MISSING


class TypedPreference(Generic[T]):
    """A typed preference bound to one key of a store.

    Prefer the named constructors (direct, direct_nullable, raw,
    raw_nullable); they pick the Strategy for the value shape. With
    store=None the standard store (prefwrap.config) is resolved on every
    access, so no I/O happens at construction.

    Assigned as a class attribute, a preference works as a descriptor:
    ``obj.attr`` reads it and ``obj.attr = v`` writes it.
    """

    def __init__(
        self,
        key: str,
        strategy: Strategy,
        value_type: type,
        store: StorePort | None = None,
        default: Any = _MISSING,
    ) -> None:
        if not isinstance(key, str) or not key:
            msg = f"Preference key must be a non-empty string, got {key!r}"
            raise ValueError(msg)

        self._key = key
        self._strategy = strategy
        self._store = store

        if strategy.raw:
            self._value_type = value_type
            self._stored_type = _raw_type(value_type)
        else:
            self._stored_type = _primitive_type(value_type)
            self._value_type = self._stored_type

        if strategy.nullable:
            if default is not _MISSING:
                msg = f"{strategy.value} preference {key!r} takes no default; absence reads as None"
                raise ValueError(msg)
            self._default = None
        else:
            if default is _MISSING:
                msg = f"{strategy.value} preference {key!r} requires a default"
                raise ValueError(msg)
            self._default = self._check_default(default)

    def _check_default(self, default: Any) -> Any:
        if self._strategy.raw:
            if isinstance(default, self._value_type):
                return default
        else:
            checked = _cast(default, self._stored_type)
            if checked is not _MISSING:
                return checked
        raise UnsupportedValueTypeError(
            type(default),
            f"Default {default!r} for {self._key!r} is not a {self._value_type.__name__}",
        )

    # -- Named constructors --

    @classmethod
    def direct(
        cls,
        key: str,
        default: P,
        store: StorePort | None = None,
        *,
        value_type: type[P] | None = None,
    ) -> TypedPreference[P]:
        """Primitive preference; the type is taken from default unless given."""
        return cls(key, Strategy.DIRECT, value_type or type(default), store, default)

    @classmethod
    def direct_nullable(
        cls,
        key: str,
        value_type: type[P],
        store: StorePort | None = None,
    ) -> TypedPreference[P | None]:
        """Optional primitive preference; reads None when unset."""
        return cls(key, Strategy.DIRECT_NULLABLE, value_type, store)

    @classmethod
    def raw(
        cls,
        key: str,
        default: E,
        store: StorePort | None = None,
    ) -> TypedPreference[E]:
        """Enum preference stored by raw value; the enum is type(default)."""
        return cls(key, Strategy.RAW_REPRESENTABLE, type(default), store, default)

    @classmethod
    def raw_nullable(
        cls,
        key: str,
        enum_type: type[E],
        store: StorePort | None = None,
    ) -> TypedPreference[E | None]:
        """Optional enum preference; reads None when unset or unrecognised."""
        return cls(key, Strategy.RAW_REPRESENTABLE_NULLABLE, enum_type, store)

    # -- Accessor --

    @property
    def key(self) -> str:
        return self._key

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def value(self) -> T:
        return self._read()

    @value.setter
    def value(self, new_value: T) -> None:
        self._write(new_value)

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self._read()

    def __set__(self, instance: object, new_value: T) -> None:
        self._write(new_value)

    def __repr__(self) -> str:
        return (
            f"TypedPreference(key={self._key!r}, strategy={self._strategy.name}, "
            f"type={self._value_type.__name__})"
        )

    # -- Dispatch --

    def _resolve_store(self) -> StorePort:
        return self._store if self._store is not None else get_standard_store()

    def _read(self) -> Any:
        stored = self._resolve_store().read(self._key)
        value = _cast(stored, self._stored_type)

        if value is _MISSING:
            reason = "absent" if stored is None else f"stored {type(stored).__name__}"
        elif self._strategy.raw:
            try:
                return self._value_type(value)
            except ValueError:
                reason = f"no {self._value_type.__name__} member for stored raw value"
        else:
            return value

        logger.debug("Preference %r (%s) fell back: %s", self._key, self._strategy.value, reason)
        return self._default

    def _write(self, new_value: Any) -> None:
        store = self._resolve_store()
        if new_value is None and self._strategy.nullable:
            store.delete(self._key)
            return

        if self._strategy.raw:
            if not isinstance(new_value, self._value_type):
                raise UnsupportedValueTypeError(
                    type(new_value),
                    f"Preference {self._key!r} stores {self._value_type.__name__} members, "
                    f"got {new_value!r}",
                )
            raw: StoredValue = new_value.value
            store.write(self._key, raw)
        else:
            store.write(self._key, new_value)
