"""Cached event store backed by the site API."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import date, datetime, timezone
from typing import Callable

from ._client import HillCountryApiClient
from .calendar import DayMarker, events_on_day, month_markers
from .exceptions import EventNotFoundError
from .models import DisplayMonth, Event

_LOGGER = logging.getLogger(__name__)


class EventStore:
    """Keeps the full event collection in memory between calendar renders.

    Holds a list of events in source order plus a slug index. The cache is
    replaced wholesale by ``async_refresh()`` and dropped by
    ``invalidate()``; ``async_get_events()`` refreshes on demand once the
    cache is empty or older than ``max_age`` seconds.
    """

    def __init__(
        self,
        client: HillCountryApiClient,
        *,
        max_age: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._max_age = client.config.cache_max_age if max_age is None else max_age
        self._clock = clock
        self._events: list[Event] = []
        self._by_slug: dict[str, Event] = {}
        self._fetched_at: float | None = None
        self._last_refreshed: datetime | None = None
        self._lock = asyncio.Lock()

    @property
    def events(self) -> list[Event]:
        """Cached events; empty until the first refresh."""
        return list(self._events)

    @property
    def last_refreshed(self) -> datetime | None:
        return self._last_refreshed

    @property
    def is_stale(self) -> bool:
        if self._fetched_at is None:
            return True
        return self._clock() - self._fetched_at >= self._max_age

    @property
    def display_timezone(self) -> str | None:
        return self._client.config.display_timezone

    async def async_refresh(self) -> list[Event]:
        """Fetch all events and replace the cache."""
        async with self._lock:
            events = await self._client.async_get_events()
            self._events = events
            self._by_slug = {event.slug: event for event in events if event.slug}
            self._fetched_at = self._clock()
            self._last_refreshed = datetime.now(tz=timezone.utc)
            _LOGGER.debug("Event store refreshed with %d events", len(events))
            return list(events)

    def invalidate(self) -> None:
        """Drop the cache so the next read refetches."""
        self._events = []
        self._by_slug = {}
        self._fetched_at = None
        self._last_refreshed = None

    async def async_get_events(self) -> list[Event]:
        """Return cached events, refreshing when empty or stale."""
        if self.is_stale:
            return await self.async_refresh()
        return list(self._events)

    async def async_get_event(self, slug: str) -> Event:
        """Return one event by slug, from cache when possible.

        Raises:
            EventNotFoundError: If the site has no event with this slug.
        """
        if not self.is_stale and slug in self._by_slug:
            return self._by_slug[slug]
        try:
            event = await self._client.async_get_event(slug)
        except EventNotFoundError:
            self._by_slug.pop(slug, None)
            raise
        if self._fetched_at is not None:
            self._by_slug[slug] = event
        return event

    async def async_events_on_day(self, day: date) -> list[Event]:
        """Events occurring on ``day``, in source order."""
        return events_on_day(await self.async_get_events(), day, tz=self.display_timezone)

    async def async_month_markers(self, month: DisplayMonth) -> list[DayMarker]:
        """Day markers for every day of ``month``."""
        return month_markers(await self.async_get_events(), month, tz=self.display_timezone)
