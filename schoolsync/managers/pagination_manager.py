"""Pagination state management for cursor-based loading."""

from enum import Enum
from typing import Optional


class LoaderState(Enum):
    IDLE = "idle"
    FETCHING_FIRST_PAGE = "fetching_first_page"
    FETCHING_NEXT_PAGE = "fetching_next_page"
    DRAINED = "drained"
    HALTED = "halted"
    CANCELLED = "cancelled"


FETCHING_STATES = (LoaderState.FETCHING_FIRST_PAGE, LoaderState.FETCHING_NEXT_PAGE)


class PaginationManager:
    def __init__(self):
        self.state = LoaderState.IDLE
        self.cursor: Optional[str] = None
        self.first_page_loaded = False
        # Set when the request that halted loading was a first-page request
        self.retry_first_page = False

    @property
    def loading(self) -> bool:
        return self.state in FETCHING_STATES

    @property
    def has_more(self) -> bool:
        # Before the first page we don't know yet, so assume there is one
        if not self.first_page_loaded:
            return True
        return self.cursor is not None

    def can_load_more(self) -> bool:
        # A halted loader can always repeat the request that failed
        if self.state is LoaderState.HALTED:
            return True
        return self.state is LoaderState.IDLE and self.has_more

    def restore(self, cursor: Optional[str]) -> None:
        """Seed state from a cached snapshot."""
        self.cursor = cursor
        self.first_page_loaded = True
        self.retry_first_page = False
        self.state = LoaderState.IDLE

    def start_loading(self, first_page: bool = False) -> None:
        if self.loading:
            raise RuntimeError("A page request is already in flight")
        if self.state is LoaderState.CANCELLED:
            raise RuntimeError("Loader has been cancelled")
        self.state = (
            LoaderState.FETCHING_FIRST_PAGE if first_page else LoaderState.FETCHING_NEXT_PAGE
        )

    def finish_loading(self, next_cursor: Optional[str]) -> None:
        self.cursor = next_cursor
        self.first_page_loaded = True
        self.retry_first_page = False
        self.state = LoaderState.IDLE if next_cursor is not None else LoaderState.DRAINED

    def halt(self) -> None:
        self.retry_first_page = self.state is LoaderState.FETCHING_FIRST_PAGE
        self.state = LoaderState.HALTED

    def cancel(self) -> None:
        self.state = LoaderState.CANCELLED

    def reset(self) -> None:
        self.state = LoaderState.IDLE
        self.cursor = None
        self.first_page_loaded = False
        self.retry_first_page = False
