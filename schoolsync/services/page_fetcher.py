"""Fetches one page of a cursor-paginated list."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from schoolsync.core.errors import ApiError, FetchError
from schoolsync.services.api_client import ApiClient

logger = logging.getLogger("SchoolSync.PageFetcher")


@dataclass(frozen=True)
class Page:
    records: List[Any] = field(default_factory=list)
    next_cursor: Optional[str] = None


def parse_page(payload: Any) -> Page:
    """Map any accepted response shape to a ``Page``.

    A bare list is a single terminal page. An envelope exposes the records
    under ``data`` (or ``students``) and the cursor under ``nextPageToken``.
    Anything else is treated as an empty terminal page.
    """
    if isinstance(payload, list):
        return Page(records=payload, next_cursor=None)

    if isinstance(payload, dict):
        records = payload.get("data")
        if not isinstance(records, list):
            records = payload.get("students")
        if isinstance(records, list):
            return Page(records=records, next_cursor=payload.get("nextPageToken") or None)

    logger.warning("Unexpected page shape: %s", type(payload).__name__)
    return Page()


class PageFetcher:
    def __init__(self, api: ApiClient, path: str = "/api/students", page_size: int = 10):
        self.api = api
        self.path = path
        self.page_size = page_size

    async def fetch_page(self, cursor: Optional[str] = None) -> Page:
        """Request the page starting after ``cursor``.

        Raises:
            FetchError: the request failed or the backend answered non-2xx
        """
        params = {"limit": self.page_size}
        if cursor:
            params["startAfter"] = cursor

        try:
            resp = await self.api.request("GET", self.path, params=params)
        except ApiError as e:
            raise FetchError(e.message, status_code=e.status_code, cursor=cursor) from e

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Page response from %s is not JSON", self.path)
            return Page()

        page = parse_page(payload)
        logger.debug(
            "Fetched %d records from %s (cursor=%r, next=%r)",
            len(page.records),
            self.path,
            cursor,
            page.next_cursor,
        )
        return page
