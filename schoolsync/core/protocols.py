"""Protocol definitions for dependency injection."""

from typing import Any, List, Optional, Protocol


class SessionStorePort(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...


class PageFetcherPort(Protocol):
    async def fetch_page(self, cursor: Optional[str] = None): ...


class NotifierPort(Protocol):
    def show(self, message: str, level: str = "info") -> None: ...


class ResourcePort(Protocol):
    async def list(self, params: Optional[dict] = None) -> List[dict]: ...

    async def get(self, record_id) -> dict: ...

    async def create(self, payload: dict) -> dict: ...

    async def update(self, record_id, payload: dict) -> dict: ...

    async def delete(self, record_id) -> None: ...
