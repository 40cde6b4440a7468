"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"


@pytest.fixture
def session_store():
    from tests.fakes.recording_session_store import RecordingSessionStore

    return RecordingSessionStore()


@pytest.fixture
def snapshot_store(session_store):
    from schoolsync.infrastructure.snapshot_store import SnapshotStore

    return SnapshotStore(session_store, key="studentsCache")


@pytest.fixture
def notifications():
    from schoolsync.managers.notification_manager import NotificationManager

    return NotificationManager(auto_hide_seconds=60)


@pytest.fixture
def make_loader(snapshot_store, notifications):
    """Build a ListLoaderManager around a scripted fetcher."""
    from schoolsync.managers.list_loader_manager import ListLoaderManager
    from schoolsync.managers.reconciler import Reconciler

    def _make(fetcher, auto_load_delay: float = 0):
        return ListLoaderManager(
            fetcher=fetcher,
            reconciler=Reconciler(snapshot_store),
            snapshot_store=snapshot_store,
            notifications=notifications,
            auto_load_delay=auto_load_delay,
        )

    return _make
