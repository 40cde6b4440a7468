"""Configuration management."""

from .paths import AppPaths
from .settings import (
    ApiSettings,
    CacheSettings,
    NotificationSettings,
    PaginationSettings,
    ScrollSettings,
    Settings,
    SettingsManager,
)

__all__ = [
    "AppPaths",
    "ApiSettings",
    "CacheSettings",
    "NotificationSettings",
    "PaginationSettings",
    "ScrollSettings",
    "Settings",
    "SettingsManager",
]
