"""
SchoolSync Settings Management
Loads and validates settings from settings.yml using Pydantic
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("SchoolSync.Settings")

API_URL_ENV = "SCHOOLSYNC_API_URL"


class ApiSettings(BaseModel):
    """REST backend settings"""
    base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the school-management backend"
    )
    timeout: float = Field(
        default=10.0,
        ge=1,
        le=120,
        description="Request timeout in seconds (1-120)"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for the full student list request (1-10)"
    )
    retry_base_timeout: float = Field(
        default=15.0,
        ge=1,
        le=120,
        description="Timeout of the first attempt; doubled on each retry"
    )
    retry_backoff: float = Field(default=0.25, ge=0, le=10)

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')


class PaginationSettings(BaseModel):
    """Paginated list loading settings"""
    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of records requested per page (1-100)"
    )
    auto_load_delay: float = Field(
        default=0.15,
        ge=0,
        le=10,
        description="Pause in seconds between background page requests"
    )


class ScrollSettings(BaseModel):
    """Scroll-triggered loading settings"""
    debounce_ms: int = Field(default=150, ge=0, le=5000)
    threshold_px: int = Field(
        default=350,
        ge=0,
        le=10000,
        description="Distance from the bottom that triggers loading more"
    )


class CacheSettings(BaseModel):
    """Session snapshot settings"""
    snapshot_key: str = Field(default="studentsCache", min_length=1)


class NotificationSettings(BaseModel):
    auto_hide_seconds: int = Field(default=5, ge=1, le=60)


class Settings(BaseModel):
    """Main settings model"""
    api: ApiSettings = Field(default_factory=ApiSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    scroll: ScrollSettings = Field(default_factory=ScrollSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager

        Args:
            config_path: Path to settings.yml file. Defaults to ./settings.yml
        """
        if config_path is None:
            config_path = Path("settings.yml")

        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """Load and validate settings from YAML file, then apply env overrides"""
        settings = self._read_file()
        env_url = os.environ.get(API_URL_ENV)
        if env_url:
            logger.debug("Using %s from environment", API_URL_ENV)
            settings.api = ApiSettings(base_url=env_url, timeout=settings.api.timeout)
        return settings

    def _read_file(self) -> Settings:
        try:
            if not self.config_path.exists():
                logger.info("Settings file not found at %s, using defaults", self.config_path)
                return Settings()

            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f)

            if config_data is None:
                logger.info("Settings file is empty, using defaults")
                return Settings()

            settings = Settings(**config_data)
            logger.info("Loaded settings from %s", self.config_path)
            logger.debug("  - API base URL: %s", settings.api.base_url)
            logger.debug("  - Page size: %s", settings.pagination.page_size)
            return settings

        except yaml.YAMLError as e:
            logger.error("Error parsing settings YAML: %s", e)
            return Settings()
        except Exception as e:
            logger.error("Error loading settings: %s, using defaults", e)
            return Settings()

    def reload(self):
        """Reload settings from file"""
        self.settings = self._load_settings()

    @property
    def base_url(self) -> str:
        return self.settings.api.base_url

    @property
    def page_size(self) -> int:
        return self.settings.pagination.page_size

    @property
    def snapshot_key(self) -> str:
        return self.settings.cache.snapshot_key

    def save(self):
        """Save current settings to YAML file"""
        config_data = self.settings.model_dump()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False)
