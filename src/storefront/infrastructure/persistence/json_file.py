"""Thread-safe JSON file access shared by the JSON repositories.

Each file gets one re-entrant lock for the whole process, so two
repository instances pointing at the same file still serialize their
read-modify-write cycles.  Writes go to a temporary file that is then
renamed over the original, so a failed write never leaves a half-written
file behind.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from storefront.domain.exceptions import StorageError

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.RLock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path.resolve()
        self.lock = _lock_for(self.path)
        self._ensure_file()

    def read(self) -> list[dict]:
        with self.lock:
            try:
                return json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise StorageError(f"Cannot read {self.path.name}: {exc}") from exc

    def write(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        with self.lock:
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.write(payload)
                    os.replace(tmp_name, self.path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise StorageError(f"Cannot write {self.path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        with self.lock:
            try:
                if not self.path.exists():
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                    self.path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Cannot create {self.path.name}: {exc}") from exc
