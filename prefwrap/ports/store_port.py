"""StorePort - Key-value preference persistence interface.

Abstracts the platform preference store that TypedPreference reads from and
writes to. Implementations: in-memory dict, JSON file, Redis.

Contract:
    - Values are StoredValue shapes only; None is never stored.
    - delete() of a missing key is a no-op.
    - Each single call is atomic; ordering across calls is not guaranteed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prefwrap.shared.types import StoredValue


class StorePort(ABC):
    """Port: Key-value preference read/write."""

    @abstractmethod
    def read(self, key: str) -> StoredValue | None:
        """Retrieve the value stored under a key.

        Args:
            key: Preference key.

        Returns:
            Stored value or None if the key is absent.
        """

    @abstractmethod
    def write(self, key: str, value: StoredValue) -> None:
        """Persist a value, overwriting any previous value for the key.

        Args:
            key: Preference key.
            value: Primitive value to store.

        Raises:
            UnsupportedValueTypeError: If value is not a StoredValue shape.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key and its value entirely.

        Args:
            key: Preference key.
        """
