"""Application paths configuration."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    config_path: Path
    session_dir: Path

    @property
    def session_file(self) -> Path:
        return self.session_dir / "session.json"

    @classmethod
    def default(cls) -> "AppPaths":
        # XDG_RUNTIME_DIR is emptied when the login session ends
        runtime_dir = os.environ.get("XDG_RUNTIME_DIR", "/tmp")

        return cls(
            config_path=Path("settings.yml"),
            session_dir=Path(runtime_dir) / "schoolsync",
        )
