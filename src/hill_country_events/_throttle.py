"""Request throttle to enforce minimum delay between API calls."""

from __future__ import annotations

import asyncio
import time

from .const import DEFAULT_THROTTLE_SECONDS


class RequestThrottle:
    """Ensures a minimum interval between consecutive API requests."""

    def __init__(self, min_interval: float = DEFAULT_THROTTLE_SECONDS) -> None:
        self._min_interval = min_interval
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def acquire(self) -> None:
        """Wait until the minimum interval has elapsed since the last request."""
        async with self._lock:
            if self._last_request is not None:
                wait = self._min_interval - (time.monotonic() - self._last_request)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = time.monotonic()
