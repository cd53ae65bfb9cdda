"""Tests for the prefwrap error hierarchy."""

from __future__ import annotations

from prefwrap.shared.errors import (
    ConfigurationError,
    PrefwrapError,
    StoredValueDecodeError,
    StoreUnavailableError,
    UnsupportedValueTypeError,
)


class TestPrefwrapError:
    def test_instantiation(self) -> None:
        error = PrefwrapError("Test error")
        assert str(error) == "Test error"
        assert error.code == "PREFWRAP_ERROR"

    def test_custom_code(self) -> None:
        error = PrefwrapError("Custom error", code="CUSTOM_CODE")
        assert error.code == "CUSTOM_CODE"

    def test_subclasses_share_base(self) -> None:
        for error in (
            UnsupportedValueTypeError(list),
            StoredValueDecodeError("bad"),
            StoreUnavailableError("RedisStore"),
            ConfigurationError("bad"),
        ):
            assert isinstance(error, PrefwrapError)


class TestUnsupportedValueTypeError:
    def test_default_message_names_type(self) -> None:
        error = UnsupportedValueTypeError(list)
        assert str(error) == "Unsupported preference value type: list"
        assert error.code == "UNSUPPORTED_TYPE"
        assert error.value_type is list

    def test_custom_message(self) -> None:
        error = UnsupportedValueTypeError(dict, "Cannot store value of type dict")
        assert str(error) == "Cannot store value of type dict"


class TestStoreUnavailableError:
    def test_default_message(self) -> None:
        error = StoreUnavailableError(store_name="RedisStore")
        assert str(error) == "Store RedisStore is unavailable"
        assert error.code == "STORE_UNAVAILABLE"
        assert error.store_name == "RedisStore"

    def test_custom_message(self) -> None:
        error = StoreUnavailableError("RedisStore", "Redis unavailable during read")
        assert str(error) == "Redis unavailable during read"


class TestOtherErrors:
    def test_decode_error(self) -> None:
        assert StoredValueDecodeError("x").code == "DECODE_FAILED"

    def test_configuration_error(self) -> None:
        error = ConfigurationError("bad backend", setting="PREFWRAP_STORE_BACKEND")
        assert error.code == "CONFIG_INVALID"
        assert error.setting == "PREFWRAP_STORE_BACKEND"
