"""Shared Fake adapters for testing without unittest.mock.

Real Python classes with in-memory state, no MagicMock.
"""

from tests.fakes.fake_redis import FakeRedis, UnreachableRedis
from tests.fakes.recording_store import RecordingStore

__all__ = [
    "FakeRedis",
    "RecordingStore",
    "UnreachableRedis",
]
