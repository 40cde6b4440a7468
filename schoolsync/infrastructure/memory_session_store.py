"""In-process session storage."""

import copy
from typing import Any, Dict


class MemorySessionStore:
    """Session store that lives as long as the process.

    Values are deep-copied on the way in and out so callers can't mutate
    stored data by accident.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()
