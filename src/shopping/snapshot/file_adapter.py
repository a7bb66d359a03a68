"""JSON-file snapshot store: durable local storage for a single machine.

All keys live in one JSON object on disk. Every write rewrites the file
through a temporary sibling and an atomic rename, so a crash mid-write leaves
the previous snapshot intact. There is no locking: two processes sharing the
file race with last-write-wins semantics, exactly like two browser tabs
sharing local storage.
"""

import json
import os
from pathlib import Path

import structlog

from shopping.snapshot.port import SnapshotStore, SnapshotStoreError

logger = structlog.get_logger(__name__)


class JsonFileSnapshotStore(SnapshotStore):
    """Snapshot store persisted to a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise SnapshotStoreError(f"Cannot read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise SnapshotStoreError(f"Corrupt snapshot file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise SnapshotStoreError(f"Corrupt snapshot file {self.path}: expected a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise SnapshotStoreError(f"Cannot write {self.path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            # Values are always written as strings; anything else was edited by hand.
            return json.dumps(value)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug("snapshot_written", path=str(self.path), key=key, size=len(value))

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
