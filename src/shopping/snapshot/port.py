"""Snapshot store port (abstract interface).

A snapshot store is a small durable key-value store holding serialized
session state (a browser-style local storage).
Values are opaque strings; the engines own the encoding. Swapping between
InMemorySnapshotStore (tests, ephemeral sessions) and JsonFileSnapshotStore
(durable local sessions) needs no change in engine code.
"""

from abc import ABC, abstractmethod


class SnapshotStoreError(Exception):
    """The underlying storage could not be read or written."""


class SnapshotStore(ABC):
    """Abstract snapshot store interface."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""
        ...
