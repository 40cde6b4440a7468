"""Exceptions raised by SchoolSync services."""

from typing import Optional


class SchoolSyncError(Exception):
    """Base exception for SchoolSync"""
    pass


class ApiError(SchoolSyncError):
    """Raised when the backend cannot be reached or answers with a non-2xx status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"


class FetchError(ApiError):
    """Raised when a single page of a paginated list fails to load"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cursor: Optional[str] = None,
    ):
        super().__init__(message, status_code)
        self.cursor = cursor
