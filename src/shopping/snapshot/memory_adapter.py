"""Configurable in-memory snapshot store for development and testing.

Behaves like a fresh browser profile: nothing survives the process. It can be
told to fail reads or writes at runtime, which is how tests exercise the
engines' degraded-durability paths.
"""

from shopping.snapshot.port import SnapshotStore, SnapshotStoreError


class InMemorySnapshotStore(SnapshotStore):
    """Dictionary-backed snapshot store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads: bool = False
        self.fail_writes: bool = False
        self.calls: list[dict] = []

    def configure(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        """Configure store behavior at runtime."""
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key: str) -> str | None:
        self.calls.append({"method": "get", "key": key})
        if self.fail_reads:
            raise SnapshotStoreError(f"Simulated read failure for {key!r}")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.calls.append({"method": "set", "key": key, "value": value})
        if self.fail_writes:
            raise SnapshotStoreError(f"Simulated write failure for {key!r}")
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.calls.append({"method": "delete", "key": key})
        if self.fail_writes:
            raise SnapshotStoreError(f"Simulated write failure for {key!r}")
        self.data.pop(key, None)
