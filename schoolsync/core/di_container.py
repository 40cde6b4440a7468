"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import Optional

from schoolsync.config import AppPaths, Settings, SettingsManager
from schoolsync.core.protocols import ResourcePort, SessionStorePort
from schoolsync.infrastructure import JsonSessionStore, SnapshotStore
from schoolsync.managers import (
    ListLoaderManager,
    NotificationManager,
    Reconciler,
    ScrollTrigger,
)
from schoolsync.services import (
    ApiClient,
    AttendanceService,
    PageFetcher,
    ResourceService,
    ScratchCardService,
    StudentService,
)


@dataclass
class AppContainer:
    settings: Settings
    paths: AppPaths

    _api_client: Optional[ApiClient] = field(default=None, init=False, repr=False)
    _session_store: Optional[SessionStorePort] = field(default=None, init=False, repr=False)
    _notification_manager: Optional[NotificationManager] = field(
        default=None, init=False, repr=False
    )

    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            self._api_client = ApiClient(
                self.settings.api.base_url, timeout=self.settings.api.timeout
            )
        return self._api_client

    @property
    def session_store(self) -> SessionStorePort:
        if self._session_store is None:
            self._session_store = JsonSessionStore(self.paths.session_file)
        return self._session_store

    @property
    def snapshot_store(self) -> SnapshotStore:
        return SnapshotStore(self.session_store, key=self.settings.cache.snapshot_key)

    @property
    def notification_manager(self) -> NotificationManager:
        if self._notification_manager is None:
            self._notification_manager = NotificationManager(
                auto_hide_seconds=self.settings.notifications.auto_hide_seconds
            )
        return self._notification_manager

    @property
    def student_service(self) -> StudentService:
        api = self.settings.api
        return StudentService(
            self.api_client,
            retry_attempts=api.retry_attempts,
            retry_base_timeout=api.retry_base_timeout,
            retry_backoff=api.retry_backoff,
        )

    @property
    def attendance_service(self) -> AttendanceService:
        return AttendanceService(self.api_client)

    @property
    def scratch_card_service(self) -> ScratchCardService:
        return ScratchCardService(self.api_client)

    def resource_service(self, resource: str) -> ResourcePort:
        if resource == "students":
            return self.student_service
        if resource == "attendance":
            return self.attendance_service
        if resource == "scratch-cards":
            return self.scratch_card_service
        return ResourceService(self.api_client, resource)

    def create_student_loader(self) -> ListLoaderManager:
        snapshot_store = self.snapshot_store
        fetcher = PageFetcher(
            self.api_client,
            path="/api/students",
            page_size=self.settings.pagination.page_size,
        )
        return ListLoaderManager(
            fetcher=fetcher,
            reconciler=Reconciler(snapshot_store),
            snapshot_store=snapshot_store,
            notifications=self.notification_manager,
            auto_load_delay=self.settings.pagination.auto_load_delay,
        )

    def create_scroll_trigger(self, loader: ListLoaderManager) -> ScrollTrigger:
        return ScrollTrigger(
            loader.load_more,
            debounce_ms=self.settings.scroll.debounce_ms,
            threshold_px=self.settings.scroll.threshold_px,
        )

    async def aclose(self) -> None:
        if self._api_client is not None:
            await self._api_client.aclose()

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        paths: Optional[AppPaths] = None,
        session_store: Optional[SessionStorePort] = None,
    ) -> "AppContainer":
        paths = paths or AppPaths.default()
        if settings is None:
            settings = SettingsManager(paths.config_path).settings
        container = cls(settings=settings, paths=paths)
        if session_store is not None:
            container._session_store = session_store
        return container
