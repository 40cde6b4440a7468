"""Manages non-blocking notifications and their auto-hide."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger("SchoolSync.NotificationManager")


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = "info"


class NotificationManager:
    """Holds the currently visible notification and hides it after a delay.

    Consumers render ``current`` and may register ``on_change`` to be told
    when it is shown or hidden.
    """

    def __init__(
        self,
        auto_hide_seconds: float = 5,
        on_change: Optional[Callable[[Optional[Notification]], None]] = None,
    ):
        """Initialize NotificationManager.

        Args:
            auto_hide_seconds: Seconds before auto-hiding notification
            on_change: Called with the new notification, or None when hidden
        """
        self.auto_hide_seconds = auto_hide_seconds
        self.on_change = on_change
        self.current: Optional[Notification] = None
        self.history: List[Notification] = []
        self._hide_handle: Optional[asyncio.TimerHandle] = None

    def show(self, message: str, level: str = "info") -> None:
        """Show a notification message.

        Args:
            message: The message to display
            level: "info", "success" or "error"
        """
        log = logger.warning if level == "error" else logger.info
        log("Notification: %s", message)

        self._cancel_hide()
        self.current = Notification(message=message, level=level)
        self.history.append(self.current)
        self._notify()

        # Auto-hide only when running inside an event loop
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._hide_handle = loop.call_later(self.auto_hide_seconds, self._hide)

    def error(self, message: str) -> None:
        self.show(message, level="error")

    def _hide(self) -> None:
        self._hide_handle = None
        self.current = None
        self._notify()

    def hide(self) -> None:
        """Immediately hide the notification."""
        self._cancel_hide()
        self._hide()

    def _cancel_hide(self) -> None:
        if self._hide_handle is not None:
            self._hide_handle.cancel()
            self._hide_handle = None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.current)
