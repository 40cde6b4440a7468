"""Backend access services."""

from .api_client import ApiClient
from .page_fetcher import Page, PageFetcher, parse_page
from .resource_service import (
    RESOURCES,
    AttendanceService,
    ResourceService,
    ScratchCardService,
    StudentService,
)

__all__ = [
    "ApiClient",
    "AttendanceService",
    "Page",
    "PageFetcher",
    "parse_page",
    "RESOURCES",
    "ResourceService",
    "ScratchCardService",
    "StudentService",
]
