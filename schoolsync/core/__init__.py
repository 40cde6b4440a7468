"""Core interfaces, errors and dependency injection."""

from .errors import ApiError, FetchError, SchoolSyncError
from .protocols import NotifierPort, PageFetcherPort, ResourcePort, SessionStorePort

__all__ = [
    "ApiError",
    "FetchError",
    "SchoolSyncError",
    "NotifierPort",
    "PageFetcherPort",
    "ResourcePort",
    "SessionStorePort",
]
