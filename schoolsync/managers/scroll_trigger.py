"""Debounced near-bottom detection for infinite scroll."""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger("SchoolSync.ScrollTrigger")


class ScrollTrigger:
    """Calls ``on_near_bottom`` once scrolling settles close to the end.

    Every scroll event restarts the debounce timer; only the last position
    reported within the delay is checked.
    """

    def __init__(
        self,
        on_near_bottom: Callable[[], object],
        debounce_ms: int = 150,
        threshold_px: int = 350,
    ):
        self.on_near_bottom = on_near_bottom
        self.debounce_ms = debounce_ms
        self.threshold_px = threshold_px
        self._pending: Optional[asyncio.TimerHandle] = None

    def is_near_bottom(self, scroll_top: float, viewport_height: float, content_height: float) -> bool:
        distance = content_height - (scroll_top + viewport_height)
        return distance <= self.threshold_px

    def on_scroll(self, scroll_top: float, viewport_height: float, content_height: float) -> None:
        """Record a scroll position. Must be called from the event loop thread."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(
            self.debounce_ms / 1000,
            self._check,
            scroll_top,
            viewport_height,
            content_height,
        )

    def _check(self, scroll_top: float, viewport_height: float, content_height: float) -> None:
        self._pending = None
        if self.is_near_bottom(scroll_top, viewport_height, content_height):
            logger.debug("Near bottom, requesting more")
            self.on_near_bottom()

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
