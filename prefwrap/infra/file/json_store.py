"""JSON-file implementation of StorePort.

The platform preference store on a plain filesystem: one JSON object per
file, key -> value envelope (see prefwrap.infra.codec).

- Atomic writes (tmp file + os.replace), no corrupted file on crash
- Resilient loads: a corrupt file reads as empty and is backed up before overwrite
- No caching: every read loads the file
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prefwrap.infra.codec import ensure_storable, from_envelope, to_envelope
from prefwrap.ports.store_port import StorePort
from prefwrap.shared.errors import StoredValueDecodeError

if TYPE_CHECKING:
    from prefwrap.shared.types import StoredValue

logger = logging.getLogger(__name__)


def default_preferences_path() -> Path:
    return Path.home() / ".prefwrap" / "preferences.json"


class JsonFileStore(StorePort):
    """Load/modify/save store over a single JSON file.

    Reads never touch the disk beyond loading. A corrupt file is reported
    once per file state and backed up only when a write replaces it.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else default_preferences_path()
        self._lock = threading.Lock()
        self._reported_corrupt: tuple[int, int] | None = None

    def read(self, key: str) -> StoredValue | None:
        with self._lock:
            data, _ = self._load()
        if key not in data:
            return None
        try:
            return from_envelope(data[key])
        except StoredValueDecodeError as exc:
            logger.warning("Ignoring malformed entry %r in %s: %s", key, self.path, exc)
            return None

    def write(self, key: str, value: StoredValue) -> None:
        ensure_storable(value)
        with self._lock:
            data, corrupt = self._load()
            if corrupt:
                self._backup_corrupt()
            data[key] = to_envelope(value)
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data, _ = self._load()
            if key not in data:
                return
            del data[key]
            self._save(data)

    def _load(self) -> tuple[dict[str, Any], bool]:
        """Return (entries, corrupt). A corrupt file loads as no entries."""
        if not self.path.exists():
            return {}, False

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
            self._report_corrupt(str(exc))
            return {}, True
        if not isinstance(data, dict):
            self._report_corrupt("root is not an object")
            return {}, True
        return data, False

    def _file_state(self) -> tuple[int, int] | None:
        try:
            st = self.path.stat()
        except OSError:
            return None
        return st.st_mtime_ns, st.st_size

    def _report_corrupt(self, reason: str) -> None:
        state = self._file_state()
        if state is not None and state == self._reported_corrupt:
            return
        self._reported_corrupt = state
        logger.warning("Preferences file %s is corrupt (%s); reading it as empty", self.path, reason)

    def _backup_corrupt(self) -> None:
        ts = time.strftime("%Y%m%d_%H%M%S")
        bak = self.path.with_name(f"{self.path.name}.bak.{ts}")
        logger.warning("Backing up corrupt preferences file %s to %s before overwrite", self.path, bak)
        try:
            bak.write_bytes(self.path.read_bytes())
        except OSError:
            logger.warning("Could not back up corrupt preferences file %s", self.path, exc_info=True)
        self._reported_corrupt = None

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self.path)
