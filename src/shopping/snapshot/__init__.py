"""Snapshot store factory.

Provides get_store() / set_store() / reset_store() to swap implementations:
- InMemorySnapshotStore for development and testing (default)
- JsonFileSnapshotStore for durable local sessions

Selected with the SNAPSHOT_STORE environment variable ("memory" or "file");
the file adapter writes to SNAPSHOT_PATH.
"""

import os

from shopping.snapshot.port import SnapshotStore

DEFAULT_SNAPSHOT_PATH = ".storefront/snapshots.json"

_current_store: SnapshotStore | None = None


def get_store() -> SnapshotStore:
    """Return the configured snapshot store (singleton). Defaults to in-memory."""
    global _current_store
    if _current_store is None:
        adapter = os.environ.get("SNAPSHOT_STORE", "memory")
        if adapter == "memory":
            from shopping.snapshot.memory_adapter import InMemorySnapshotStore

            _current_store = InMemorySnapshotStore()
        elif adapter == "file":
            from shopping.snapshot.file_adapter import JsonFileSnapshotStore

            _current_store = JsonFileSnapshotStore(os.environ.get("SNAPSHOT_PATH", DEFAULT_SNAPSHOT_PATH))
        else:
            raise ValueError(f"Unknown snapshot store adapter: {adapter}")
    return _current_store


def set_store(store: SnapshotStore) -> None:
    """Override the active snapshot store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_store() -> None:
    """Reset to the environment-selected store."""
    global _current_store
    _current_store = None
