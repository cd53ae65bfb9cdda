"""Root conftest - shared fixtures for all test layers.

Markers:
    @pytest.mark.unit        - No external deps
    @pytest.mark.integration - Needs running services
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from prefwrap.config import reset_standard_store, set_standard_store
from prefwrap.infra.memory.store import InMemoryStore
from tests.fakes import RecordingStore

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def standard_store() -> Iterator[InMemoryStore]:
    """Install a fresh in-memory store as the process-wide standard store."""
    s = InMemoryStore()
    set_standard_store(s)
    yield s
    reset_standard_store()
