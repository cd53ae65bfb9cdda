"""Unit tests for the tagged value codec used by persistent stores."""

from __future__ import annotations

import json
import math

import pytest
from pydantic import AnyUrl

from prefwrap.infra.codec import (
    decode_value,
    encode_value,
    ensure_storable,
    from_envelope,
    kind_of,
    to_envelope,
)
from prefwrap.shared.errors import StoredValueDecodeError, UnsupportedValueTypeError


@pytest.mark.unit
class TestKindOf:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (True, "bool"),
            (0, "int"),
            (1.5, "float"),
            ("s", "str"),
            (b"b", "bytes"),
            (bytearray(b"b"), "bytes"),
            (AnyUrl("https://example.com/"), "uri"),
        ],
    )
    def test_kinds(self, value: object, kind: str) -> None:
        assert kind_of(value) == kind

    @pytest.mark.parametrize("value", [None, [1], {"a": 1}, object()])
    def test_rejects_unstorable(self, value: object) -> None:
        with pytest.raises(UnsupportedValueTypeError):
            ensure_storable(value)


@pytest.mark.unit
class TestEnvelope:
    def test_bool_and_int_stay_distinct(self) -> None:
        assert to_envelope(True) == {"type": "bool", "value": True}
        assert to_envelope(1) == {"type": "int", "value": 1}
        assert decode_value(encode_value(True)) is True
        assert decode_value(encode_value(1)) == 1

    def test_bytes_are_base64(self) -> None:
        assert to_envelope(b"\x00\xff") == {"type": "bytes", "value": "AP8="}
        assert decode_value(encode_value(b"\x00\xff")) == b"\x00\xff"

    def test_uri_is_not_a_string(self) -> None:
        url = AnyUrl("https://example.com/a?b=c")
        decoded = decode_value(encode_value(url))
        assert isinstance(decoded, AnyUrl)
        assert decoded == url

    def test_non_finite_floats(self) -> None:
        assert decode_value(encode_value(math.inf)) == math.inf
        assert math.isnan(decode_value(encode_value(math.nan)))  # type: ignore[arg-type]

    def test_encoded_form_is_json(self) -> None:
        assert json.loads(encode_value("héllo")) == {"type": "str", "value": "héllo"}


@pytest.mark.unit
class TestDecodeErrors:
    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"\xff\xfe",
            b"[1, 2]",
            b'{"type": "int"}',
            b'{"type": "int", "value": "7"}',
            b'{"type": "bool", "value": 1}',
            b'{"type": "bytes", "value": "***"}',
            b'{"type": "uri", "value": "not a url"}',
            b'{"type": "complex", "value": 1}',
        ],
    )
    def test_malformed_payloads(self, raw: bytes) -> None:
        with pytest.raises(StoredValueDecodeError) as exc_info:
            decode_value(raw)
        assert exc_info.value.code == "DECODE_FAILED"

    def test_from_envelope_rejects_non_dict(self) -> None:
        with pytest.raises(StoredValueDecodeError):
            from_envelope("int:1")

    def test_float_payload_too_large(self) -> None:
        with pytest.raises(StoredValueDecodeError):
            from_envelope({"type": "float", "value": 10**400})

    def test_int_literal_over_digit_limit(self) -> None:
        raw = b'{"type": "int", "value": ' + b"9" * 5001 + b"}"
        with pytest.raises(StoredValueDecodeError):
            decode_value(raw)

    def test_deeply_nested_payload(self) -> None:
        with pytest.raises(StoredValueDecodeError):
            decode_value(b"[" * 100_000 + b"]" * 100_000)
