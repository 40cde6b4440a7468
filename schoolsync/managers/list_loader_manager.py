"""List Loader Manager - progressive loading of a paginated entity list.

Seeds the list from the session snapshot, then drains the remaining pages in
the background while allowing one-off ``load_more`` requests. Only one page
request is ever in flight; pages are merged strictly in request order.
"""

import asyncio
import logging
from typing import Any, List, Optional

from schoolsync.core.errors import FetchError
from schoolsync.core.protocols import NotifierPort, PageFetcherPort
from schoolsync.domain.records import identity_key, matches_identifier
from schoolsync.infrastructure.snapshot_store import SnapshotStore
from schoolsync.managers.pagination_manager import (
    FETCHING_STATES,
    LoaderState,
    PaginationManager,
)
from schoolsync.managers.reconciler import MergeMode, Reconciler, merge_records

logger = logging.getLogger("SchoolSync.ListLoaderManager")


class ListLoaderManager:
    """Owns the in-memory entity list and its loading lifecycle."""

    def __init__(
        self,
        fetcher: PageFetcherPort,
        reconciler: Reconciler,
        snapshot_store: SnapshotStore,
        notifications: NotifierPort,
        auto_load_delay: float = 0.15,
        label: str = "students",
    ):
        """Initialize ListLoaderManager.

        Args:
            fetcher: Fetches one page for a cursor
            reconciler: Merges pages and writes the snapshot
            snapshot_store: Source of the cached list read at mount
            notifications: Receives user-facing error messages
            auto_load_delay: Pause in seconds between background page requests
            label: Entity name used in messages
        """
        self.fetcher = fetcher
        self.reconciler = reconciler
        self.snapshot_store = snapshot_store
        self.notifications = notifications
        self.auto_load_delay = auto_load_delay
        self.label = label

        self.pagination = PaginationManager()
        self.entities: List[dict] = []
        self.restored = False

        self._mounted = False
        self._auto_task: Optional[asyncio.Task] = None
        self._inflight: Optional[asyncio.Task] = None

    @property
    def state(self) -> LoaderState:
        return self.pagination.state

    @property
    def has_more(self) -> bool:
        return self.pagination.has_more

    @property
    def loading(self) -> bool:
        return self.pagination.loading

    def mount(self) -> List[dict]:
        """Seed the list from the cached snapshot. No network activity."""
        self.pagination.reset()
        self.entities = []
        self.restored = False

        snapshot = self.snapshot_store.load()
        if snapshot is not None:
            self.entities = list(snapshot.entities)
            self.pagination.restore(snapshot.next_page_token)
            self.restored = True
            logger.info("Showing %d cached %s", len(self.entities), self.label)

        self._mounted = True
        return self.entities

    def start(self) -> Optional[asyncio.Task]:
        """Start draining pages in the background.

        Returns:
            The auto-loader task, which resolves to the final LoaderState
        """
        if not self._mounted:
            self.mount()
        if self.pagination.state is LoaderState.CANCELLED:
            logger.debug("Loader closed, not starting")
            return None
        if self._auto_task is not None and not self._auto_task.done():
            return self._auto_task

        self._auto_task = asyncio.get_running_loop().create_task(self._auto_load())
        return self._auto_task

    def load_more(self) -> Optional[asyncio.Task]:
        """Fetch exactly one more page.

        From HALTED this repeats the request that failed, which may be the
        first page, and restarts the auto-loader once it succeeds.

        Returns:
            The page task, or None when nothing was requested (a request is
            already in flight, the list is drained, or the loader is closed)
        """
        pagination = self.pagination
        if not pagination.can_load_more():
            logger.debug("load_more ignored in state %s", pagination.state.value)
            return None

        resuming = pagination.state is LoaderState.HALTED
        first_page = not pagination.first_page_loaded or (
            resuming and pagination.retry_first_page
        )
        mode = MergeMode.APPEND if pagination.first_page_loaded else MergeMode.REPLACE_FIRST_PAGE
        task = self._start_page(mode, first_page=first_page)
        if resuming:
            task.add_done_callback(self._resume_after_retry)
        return task

    async def close(self) -> None:
        """Stop the auto-loader and abort any in-flight request."""
        self.pagination.cancel()
        tasks = [
            task
            for task in (self._auto_task, self._inflight)
            if task is not None and not task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._auto_task = None
        self._inflight = None
        logger.debug("Loader closed")

    def _start_page(self, mode: MergeMode, first_page: bool = False) -> asyncio.Task:
        cursor = None if first_page else self.pagination.cursor
        # Flip to a fetching state before the task exists so a second caller
        # in the same tick sees the loader as busy
        self.pagination.start_loading(first_page=first_page)
        task = asyncio.get_running_loop().create_task(self._fetch_and_merge(cursor, mode))
        self._inflight = task
        task.add_done_callback(self._clear_inflight)
        return task

    def _clear_inflight(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None

    def _halt(self, message: str) -> bool:
        self.pagination.halt()
        self.notifications.show(message, level="error")
        return False

    async def _fetch_and_merge(self, cursor: Optional[str], mode: MergeMode) -> bool:
        try:
            page = await self.fetcher.fetch_page(cursor)
        except asyncio.CancelledError:
            if self.pagination.loading:
                self.pagination.state = LoaderState.IDLE
            raise
        except FetchError as e:
            logger.warning("Loading %s stopped at cursor %r: %s", self.label, cursor, e)
            return self._halt(f"Could not load {self.label} from server.")
        except Exception:
            logger.exception("Unexpected error loading %s at cursor %r", self.label, cursor)
            return self._halt(f"Could not load {self.label} from server.")

        try:
            merged = self.reconciler.reconcile(self.entities, page.records, mode, page.next_cursor)
        except Exception:
            return self._halt(f"Could not cache {self.label}.")

        self.entities = merged
        self.pagination.finish_loading(page.next_cursor)
        return True

    async def _await_page(self, mode: MergeMode, first_page: bool = False) -> bool:
        # A manual request may already be running; wait for it instead
        if self._inflight is not None and not self._inflight.done():
            return await self._inflight
        return await self._start_page(mode, first_page=first_page)

    def _should_continue(self) -> bool:
        state = self.pagination.state
        return self.pagination.has_more and (state is LoaderState.IDLE or state in FETCHING_STATES)

    async def _auto_load(self) -> LoaderState:
        pagination = self.pagination
        ok = True

        if not pagination.first_page_loaded:
            ok = await self._await_page(MergeMode.REPLACE_FIRST_PAGE, first_page=True)
        elif pagination.cursor is None and pagination.state is LoaderState.IDLE:
            # Cached list was complete; pick up anything new from the top
            ok = await self._await_page(MergeMode.APPEND, first_page=True)
        elif self._should_continue():
            # Resuming a cached list: go straight to the stored cursor
            ok = await self._await_page(MergeMode.APPEND)

        while ok and self._should_continue():
            await asyncio.sleep(self.auto_load_delay)
            if not self._should_continue():
                break
            ok = await self._await_page(MergeMode.APPEND)

        logger.info(
            "Auto-loader finished in state %s with %d %s",
            pagination.state.value,
            len(self.entities),
            self.label,
        )
        return pagination.state

    def _resume_after_retry(self, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is not None or not task.result():
            return
        if self.pagination.has_more and (self._auto_task is None or self._auto_task.done()):
            logger.info("Manual retry succeeded, resuming auto-loader")
            self._auto_task = asyncio.get_running_loop().create_task(self._auto_load())

    def _commit(self) -> None:
        self.reconciler.commit(self.entities, self.pagination.cursor)

    def apply_created(self, record: Any) -> None:
        """Append a record created locally, unless one with its key exists."""
        self.entities = merge_records(
            self.entities, [record], MergeMode.APPEND, self.reconciler.normalize
        )
        self._commit()

    def apply_updated(self, record: Any) -> None:
        """Replace the entity sharing the record's identity key."""
        updated = self.reconciler.normalize(record)
        key = identity_key(updated)
        self.entities = [
            updated if key is not None and identity_key(entity) == key else entity
            for entity in self.entities
        ]
        self._commit()

    def apply_removed(self, id_or_uid: Any) -> None:
        """Drop entities whose ``id`` or ``uid`` matches."""
        self.entities = [e for e in self.entities if not matches_identifier(e, id_or_uid)]
        self._commit()
