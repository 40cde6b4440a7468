"""Merges fetched pages into the known entity list and persists the result."""

import logging
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from schoolsync.domain.records import identity_key, normalize_student
from schoolsync.domain.snapshot import Snapshot
from schoolsync.infrastructure.snapshot_store import SnapshotStore

logger = logging.getLogger("SchoolSync.Reconciler")


class MergeMode(Enum):
    REPLACE_FIRST_PAGE = "replace-first-page"
    APPEND = "append"


def merge_records(
    existing: List[dict],
    fresh: Iterable[Any],
    mode: MergeMode,
    normalize: Callable[[Any], Any] = normalize_student,
) -> List[dict]:
    """Combine a fetched page with the known list.

    Records already present (by ``id``, else ``uid``) are kept as they are;
    the fetched copy is dropped. Admitted records follow ``existing`` in
    fetch order. Records without any identity key are always admitted;
    entries that are not objects are skipped.
    """
    base = [] if mode is MergeMode.REPLACE_FIRST_PAGE else list(existing)
    seen = {key for key in (identity_key(r) for r in base) if key is not None}

    merged = base
    for raw in fresh:
        if not isinstance(raw, dict):
            logger.warning("Skipping %s entry in page", type(raw).__name__)
            continue
        record = normalize(raw)
        key = identity_key(record)
        if key is not None:
            if key in seen:
                continue
            seen.add(key)
        merged.append(record)
    return merged


class Reconciler:
    def __init__(
        self,
        snapshot_store: SnapshotStore,
        normalize: Callable[[Any], Any] = normalize_student,
    ):
        self.snapshot_store = snapshot_store
        self.normalize = normalize

    def reconcile(
        self,
        existing: List[dict],
        fresh: Iterable[Any],
        mode: MergeMode,
        next_cursor: Optional[str],
    ) -> List[dict]:
        """Merge ``fresh`` into ``existing`` and write the snapshot.

        The snapshot is written before returning; a storage failure is raised.
        """
        merged = merge_records(existing, fresh, mode, self.normalize)
        logger.debug(
            "Merged page (%s): %d -> %d records",
            mode.value,
            len(existing),
            len(merged),
        )
        self.commit(merged, next_cursor)
        return merged

    def commit(self, entities: List[dict], next_cursor: Optional[str]) -> None:
        try:
            self.snapshot_store.save(Snapshot(entities=list(entities), next_page_token=next_cursor))
        except Exception:
            logger.exception("Failed to persist snapshot")
            raise
