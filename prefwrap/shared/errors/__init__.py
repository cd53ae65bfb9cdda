"""Unified error hierarchy for prefwrap.

All library errors inherit from PrefwrapError. Read anomalies on a
preference (missing key, wrong stored shape, unknown enum value) are never
raised; these types cover declaration mistakes, unstorable values, corrupt
backend payloads and unreachable backends.
"""

from __future__ import annotations


class PrefwrapError(Exception):
    """Base error for all prefwrap exceptions."""

    def __init__(self, message: str, code: str = "PREFWRAP_ERROR") -> None:
        self.code = code
        super().__init__(message)


# -- Value shape errors --


class UnsupportedValueTypeError(PrefwrapError):
    """A type fits no preference strategy, or a value cannot be stored."""

    def __init__(self, value_type: object, message: str = "") -> None:
        self.value_type = value_type
        name = getattr(value_type, "__name__", repr(value_type))
        super().__init__(
            message or f"Unsupported preference value type: {name}",
            code="UNSUPPORTED_TYPE",
        )


class StoredValueDecodeError(PrefwrapError):
    """A persisted payload could not be decoded into a stored value."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="DECODE_FAILED")


# -- Store errors (raised by StorePort implementations) --


class StoreUnavailableError(PrefwrapError):
    """A store backend is temporarily unavailable."""

    def __init__(self, store_name: str, message: str = "") -> None:
        self.store_name = store_name
        super().__init__(
            message or f"Store {store_name} is unavailable",
            code="STORE_UNAVAILABLE",
        )


# -- Configuration errors --


class ConfigurationError(PrefwrapError):
    """Environment configuration is invalid."""

    def __init__(self, message: str, setting: str = "") -> None:
        self.setting = setting
        super().__init__(message, code="CONFIG_INVALID")


__all__ = [
    "ConfigurationError",
    "PrefwrapError",
    "StoreUnavailableError",
    "StoredValueDecodeError",
    "UnsupportedValueTypeError",
]
