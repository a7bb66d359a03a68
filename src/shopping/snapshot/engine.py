"""Snapshot-backed session engine.

Shared by the cart and wishlist engines: holds one live aggregate for the
session, applies transition commands to it, and mirrors the result to a
snapshot store under a fixed key.

Hydration happens once at construction. A missing key means a fresh session;
an unreadable store or an undecodable snapshot is logged and treated the same
way. Writes are best effort: a failed write is logged, the engine flips to
degraded mode and keeps serving from memory.
"""

import structlog
from protean.exceptions import ValidationError

from shopping.snapshot.port import SnapshotStore, SnapshotStoreError

logger = structlog.get_logger(__name__)


class SnapshotEngine:
    """Base class for session engines persisted to a snapshot store.

    Subclasses provide the storage key and four hooks: ``_new_aggregate``,
    ``_load_command``, ``_apply`` and ``_encode``.
    """

    storage_key: str = ""

    def __init__(self, store: SnapshotStore, storage_key: str | None = None) -> None:
        self.store = store
        if storage_key:
            self.storage_key = storage_key
        self.degraded = False
        self.aggregate = self._new_aggregate()
        self._hydrate()

    # -------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------
    def _new_aggregate(self):
        raise NotImplementedError

    def _load_command(self, raw: str):
        raise NotImplementedError

    def _apply(self, command) -> None:
        raise NotImplementedError

    def _encode(self) -> str:
        raise NotImplementedError

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def dispatch(self, command) -> list:
        """Apply one transition command and persist the result.

        Returns the domain events raised by the transition. A transition that
        raises ``ValidationError`` leaves the state untouched and writes nothing.
        """
        self._apply(command)
        events = self._drain_events()
        self._persist()
        return events

    def reload(self) -> None:
        """Discard in-memory state and hydrate again from the store."""
        self.aggregate = self._new_aggregate()
        self._hydrate()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _drain_events(self) -> list:
        events = list(self.aggregate._events)
        self.aggregate._events.clear()
        for event in events:
            logger.debug("domain_event", key=self.storage_key, event_type=event.__class__.__name__)
        return events

    def _hydrate(self) -> None:
        try:
            raw = self.store.get(self.storage_key)
        except SnapshotStoreError as exc:
            logger.warning("snapshot_read_failed", key=self.storage_key, error=str(exc))
            return

        if raw is None:
            return

        try:
            self._apply(self._load_command(raw))
        except ValidationError as exc:
            logger.warning("snapshot_discarded", key=self.storage_key, errors=exc.messages)
            self.aggregate = self._new_aggregate()
            return

        self._drain_events()
        logger.debug("snapshot_restored", key=self.storage_key)

    def _persist(self) -> None:
        try:
            self.store.set(self.storage_key, self._encode())
        except SnapshotStoreError as exc:
            logger.error("snapshot_write_failed", key=self.storage_key, error=str(exc))
            self.degraded = True
            return

        if self.degraded:
            logger.info("snapshot_write_recovered", key=self.storage_key)
        self.degraded = False
