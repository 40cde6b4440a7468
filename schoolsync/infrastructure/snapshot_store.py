"""Snapshot persistence on top of a session key/value store."""

import logging
from typing import Optional

from schoolsync.core.protocols import SessionStorePort
from schoolsync.domain.snapshot import Snapshot

logger = logging.getLogger("SchoolSync.SnapshotStore")


class SnapshotStore:
    def __init__(self, session_store: SessionStorePort, key: str = "studentsCache"):
        self.session_store = session_store
        self.key = key

    def load(self) -> Optional[Snapshot]:
        raw = self.session_store.get(self.key)
        if raw is None:
            return None

        snapshot = Snapshot.from_dict(raw)
        if snapshot is None:
            logger.warning("Discarding unreadable snapshot under key %r", self.key)
        else:
            logger.debug(
                "Restored %d cached records (cursor=%r)",
                len(snapshot.entities),
                snapshot.next_page_token,
            )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        self.session_store.set(self.key, snapshot.to_dict())

    def clear(self) -> None:
        self.session_store.remove(self.key)
