"""JSON-based session storage.

Keeps session key/value pairs in a single JSON file under
$XDG_RUNTIME_DIR/schoolsync/, so cached data survives between runs of the
same login session and disappears when the session ends.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("SchoolSync.JsonSessionStore")


class JsonSessionStore:
    """Session store using a JSON file backend."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict:
        """Load the full session dict from JSON file."""
        try:
            if self.path.exists():
                with open(self.path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning("Ignoring session file with unexpected content: %s", self.path)
        except (json.JSONDecodeError, IOError) as e:
            logger.error("Error loading session data: %s", e)
        return {}

    def _save(self, data: dict):
        """Save the full session dict to JSON file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        with open(tmp_path, 'w') as f:
            json.dump(data, f)
        tmp_path.replace(self.path)

    def get(self, key: str) -> Any:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
