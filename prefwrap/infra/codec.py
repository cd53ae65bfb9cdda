"""Tagged value codec shared by the persistent stores.

A stored value is persisted as a JSON envelope ``{"type": kind, "value": v}``
so the primitive shape survives the round trip: bool stays distinct from int,
bytes are base64, URIs are kept apart from plain strings.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from typing import TYPE_CHECKING, Any

from pydantic import AnyUrl, ValidationError

from prefwrap.shared.errors import StoredValueDecodeError, UnsupportedValueTypeError

if TYPE_CHECKING:
    from prefwrap.shared.types import StoredValue

KINDS = ("bool", "int", "float", "str", "bytes", "uri")


def kind_of(value: object) -> str:
    """Classify a value into one of KINDS.

    Raises:
        UnsupportedValueTypeError: If value is not a StoredValue shape.
    """
    # bool before int: True is an int too
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, AnyUrl):
        return "uri"
    raise UnsupportedValueTypeError(
        type(value),
        f"Cannot store value of type {type(value).__name__}",
    )


def ensure_storable(value: object) -> None:
    """Reject anything a store cannot persist."""
    kind_of(value)


def to_envelope(value: StoredValue) -> dict[str, Any]:
    kind = kind_of(value)
    if kind == "bytes":
        payload: Any = base64.b64encode(bytes(value)).decode("ascii")  # type: ignore[arg-type]
    elif kind == "uri":
        payload = str(value)
    elif kind == "float" and not math.isfinite(value):  # type: ignore[arg-type]
        # JSON has no inf/nan literals; keep the repr instead
        payload = repr(value)
    else:
        payload = value
    return {"type": kind, "value": payload}


def from_envelope(envelope: object) -> StoredValue:
    """Rebuild a stored value from its envelope.

    Raises:
        StoredValueDecodeError: If the envelope is malformed.
    """
    if not isinstance(envelope, dict) or "type" not in envelope or "value" not in envelope:
        msg = f"Malformed value envelope: {envelope!r}"
        raise StoredValueDecodeError(msg)

    kind = envelope["type"]
    payload = envelope["value"]
    try:
        if kind == "bool" and isinstance(payload, bool):
            return payload
        if kind == "int" and isinstance(payload, int) and not isinstance(payload, bool):
            return payload
        if kind == "float" and isinstance(payload, (int, float, str)) and not isinstance(payload, bool):
            return float(payload)
        if kind == "str" and isinstance(payload, str):
            return payload
        if kind == "bytes" and isinstance(payload, str):
            return base64.b64decode(payload.encode("ascii"), validate=True)
        if kind == "uri" and isinstance(payload, str):
            return AnyUrl(payload)
    except (ValueError, OverflowError, binascii.Error, ValidationError) as exc:
        msg = f"Invalid {kind} payload ({type(payload).__name__})"
        raise StoredValueDecodeError(msg) from exc

    msg = f"Unknown value kind {kind!r} for payload {payload!r}"
    raise StoredValueDecodeError(msg)


def encode_value(value: StoredValue) -> bytes:
    """Serialize a stored value to UTF-8 JSON bytes."""
    return json.dumps(to_envelope(value), sort_keys=True).encode("utf-8")


def decode_value(raw: bytes | str) -> StoredValue:
    """Deserialize bytes produced by encode_value.

    Raises:
        StoredValueDecodeError: If raw is not a valid envelope.
    """
    try:
        envelope = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
        msg = "Stored payload is not valid JSON"
        raise StoredValueDecodeError(msg) from exc
    return from_envelope(envelope)
