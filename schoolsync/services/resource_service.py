"""CRUD services for the backend's REST resources."""

import logging
from datetime import date
from typing import Any, List, Optional

from schoolsync.core.errors import ApiError
from schoolsync.domain.records import normalize_student, student_payload
from schoolsync.services.api_client import ApiClient
from schoolsync.services.page_fetcher import parse_page

logger = logging.getLogger("SchoolSync.ResourceService")

ATTENDANCE_STATUSES = ("present", "absent")

RESOURCES = (
    "students",
    "teachers",
    "admins",
    "subjects",
    "attendance",
    "results",
    "scratch-cards",
)


def unwrap(payload: Any) -> Any:
    """Strip the ``{"success": ..., "data": ...}`` envelope if present."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class ResourceService:
    def __init__(self, api: ApiClient, resource: str):
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource}")
        self.api = api
        self.resource = resource
        self.path = f"/api/{resource}"

    def _record_path(self, record_id) -> str:
        return f"{self.path}/{record_id}"

    def to_record(self, raw: Any) -> Any:
        return raw

    def to_payload(self, record: dict) -> dict:
        return record

    async def list(self, params: Optional[dict] = None) -> List[dict]:
        payload = unwrap(await self.api.get_json(self.path, params=params))
        if not isinstance(payload, list):
            logger.warning("Expected a list from %s, got %s", self.path, type(payload).__name__)
            return []
        return [self.to_record(item) for item in payload]

    async def get(self, record_id) -> dict:
        return self.to_record(unwrap(await self.api.get_json(self._record_path(record_id))))

    async def create(self, payload: dict) -> dict:
        created = await self.api.post_json(self.path, self.to_payload(payload))
        logger.info("Created %s record", self.resource)
        return self.to_record(unwrap(created))

    async def update(self, record_id, payload: dict) -> dict:
        saved = await self.api.put_json(self._record_path(record_id), self.to_payload(payload))
        logger.info("Updated %s/%s", self.resource, record_id)
        return self.to_record(unwrap(saved))

    async def delete(self, record_id) -> None:
        await self.api.delete(self._record_path(record_id))
        logger.info("Deleted %s/%s", self.resource, record_id)


class StudentService(ResourceService):
    """Student resource with record normalization in both directions."""

    def __init__(
        self,
        api: ApiClient,
        retry_attempts: int = 3,
        retry_base_timeout: float = 15.0,
        retry_backoff: float = 0.25,
    ):
        super().__init__(api, "students")
        self.retry_attempts = retry_attempts
        self.retry_base_timeout = retry_base_timeout
        self.retry_backoff = retry_backoff

    def to_record(self, raw: Any) -> Any:
        return normalize_student(raw)

    def to_payload(self, record: dict) -> dict:
        return student_payload(record)

    async def list_all(self, params: Optional[dict] = None) -> List[dict]:
        """Fetch the whole student list in one request, retrying on failure.

        Accepts a bare list or a ``data``/``students`` envelope; entries that
        are not objects are dropped.

        Raises:
            ApiError: every attempt failed
        """
        payload = await self.api.get_json_with_retry(
            self.path,
            params=params,
            max_attempts=self.retry_attempts,
            base_timeout=self.retry_base_timeout,
            backoff=self.retry_backoff,
        )
        records = parse_page(payload).records
        return [self.to_record(r) for r in records if isinstance(r, dict)]

    async def save(self, record: dict) -> dict:
        """PUT when the record already has an ``id``, POST otherwise."""
        if record.get("id"):
            return await self.update(record["id"], record)
        return await self.create(record)


class AttendanceService(ResourceService):
    """Attendance records per student, filtered by day."""

    def __init__(self, api: ApiClient):
        super().__init__(api, "attendance")

    async def history(self, student_id, day: Optional[str] = None) -> List[dict]:
        """Attendance records of one student, newest first.

        Args:
            student_id: Student ``id`` or ``uid``
            day: ISO date (YYYY-MM-DD) to restrict the records to

        Returns:
            The records, or an empty list when the backend has none (404)
        """
        params = {"date": day} if day else None
        try:
            payload = unwrap(await self.api.get_json(self._record_path(student_id), params=params))
        except ApiError as e:
            if e.status_code == 404:
                return []
            raise
        return payload if isinstance(payload, list) else []

    async def is_present(self, student_id, day: str) -> bool:
        """Whether the latest record for ``day`` says present. No record means absent."""
        records = await self.history(student_id, day)
        return bool(records) and records[0].get("status") == "present"

    async def mark(self, student_id, status: str, day: Optional[str] = None) -> Any:
        """Record a student as present or absent on ``day`` (today by default)."""
        if status not in ATTENDANCE_STATUSES:
            raise ValueError(f"Invalid attendance status: {status}")
        payload = {"status": status, "date": day or date.today().isoformat()}
        result = await self.api.post_json(f"{self.path}/mark/{student_id}", payload)
        logger.info("Marked %s %s on %s", student_id, status, payload["date"])
        return unwrap(result)


class ScratchCardService(ResourceService):
    def __init__(self, api: ApiClient):
        super().__init__(api, "scratch-cards")

    async def generate(self, quantity: int) -> List[dict]:
        """Ask the backend to issue ``quantity`` new cards and return them."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValueError("Quantity must be a positive integer")
        cards = unwrap(await self.api.post_json(f"{self.path}/generate", {"quantity": quantity}))
        logger.info("Generated %d scratch cards", quantity)
        return cards if isinstance(cards, list) else []
