"""Storage backends."""

from .json_session_store import JsonSessionStore
from .memory_session_store import MemorySessionStore
from .snapshot_store import SnapshotStore

__all__ = ["JsonSessionStore", "MemorySessionStore", "SnapshotStore"]
