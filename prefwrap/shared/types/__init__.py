"""Shared value types used across layers.

These types flow through StorePort and must remain stable: every backend
persists exactly these shapes.
"""

from __future__ import annotations

from pydantic import AnyUrl

# Order matters: bool is checked before int wherever shapes are matched.
PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, str, bytes, AnyUrl)

StoredValue = bool | int | float | str | bytes | AnyUrl

__all__ = [
    "PRIMITIVE_TYPES",
    "StoredValue",
]
