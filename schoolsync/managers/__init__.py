"""Manager classes for list loading state."""

from .list_loader_manager import ListLoaderManager
from .notification_manager import Notification, NotificationManager
from .pagination_manager import LoaderState, PaginationManager
from .reconciler import MergeMode, Reconciler, merge_records
from .scroll_trigger import ScrollTrigger

__all__ = [
    "ListLoaderManager",
    "LoaderState",
    "MergeMode",
    "Notification",
    "NotificationManager",
    "PaginationManager",
    "Reconciler",
    "ScrollTrigger",
    "merge_records",
]
