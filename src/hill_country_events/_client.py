"""Hill Country site API client."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any
from urllib.parse import quote

import aiohttp

from ._serialization import decamelize
from ._throttle import RequestThrottle
from .config import CalendarConfig
from .const import (
    CALENDAR_EVENTS_ENDPOINT,
    DESTINATION_EVENTS_ENDPOINT,
    EVENT_DETAIL_ENDPOINT,
    EVENTS_ENDPOINT,
    FEATURED_EVENTS_ENDPOINT,
    UPCOMING_EVENTS_ENDPOINT,
)
from .exceptions import (
    ApiConnectionError,
    ApiResponseError,
    EventNotFoundError,
    InvalidEventError,
    RateLimitError,
)
from .models import Event

_LOGGER = logging.getLogger(__name__)


class HillCountryApiClient:
    """Async read-only client for the site's event endpoints.

    Usage::

        async with aiohttp.ClientSession() as session:
            client = HillCountryApiClient(CalendarConfig(base_url=url), session)
            events = await client.async_get_events()

    If no session is provided, the client creates and manages its own.
    The caller is responsible for calling ``async_close()`` when done
    (or use the client as an async context manager).
    """

    def __init__(
        self,
        config: CalendarConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or CalendarConfig()
        self._owns_session = session is None
        self._session = session or aiohttp.ClientSession()
        self._throttle = RequestThrottle(min_interval=self._config.request_interval)

    async def __aenter__(self) -> HillCountryApiClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    @property
    def config(self) -> CalendarConfig:
        return self._config

    async def async_close(self) -> None:
        """Close the HTTP session if the client owns it."""
        if self._owns_session:
            await self._session.close()

    # ------------------------------------------------------------------ #
    #  Events
    # ------------------------------------------------------------------ #

    async def async_get_events(self) -> list[Event]:
        """Fetch every event on the site."""
        return _parse_events(await self._request(EVENTS_ENDPOINT))

    async def async_get_featured_events(self) -> list[Event]:
        """Fetch events flagged as featured."""
        return _parse_events(await self._request(FEATURED_EVENTS_ENDPOINT))

    async def async_get_upcoming_events(self, limit: int | None = None) -> list[Event]:
        """Fetch the next upcoming events, soonest first."""
        params = {"limit": str(limit)} if limit is not None else None
        return _parse_events(await self._request(UPCOMING_EVENTS_ENDPOINT, params=params))

    async def async_get_event(self, slug: str) -> Event:
        """Fetch a single event by slug.

        Raises:
            EventNotFoundError: If no event has this slug.
            InvalidEventError: If the returned record cannot be parsed.
        """
        url = EVENT_DETAIL_ENDPOINT.format(slug=quote(slug, safe=""))
        try:
            data = await self._request(url)
        except ApiResponseError as err:
            if err.status_code == 404:
                raise EventNotFoundError(slug) from err
            raise
        event_data = data.get("event", data) if isinstance(data, dict) else data
        return Event.from_api_response(event_data)

    async def async_get_destination_events(self, destination_id: int) -> list[Event]:
        """Fetch the events attached to a destination."""
        url = DESTINATION_EVENTS_ENDPOINT.format(destination_id=int(destination_id))
        return _parse_events(await self._request(url))

    async def async_get_calendar_events(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """Fetch events from the site's external calendar feed.

        Args:
            start: Lower bound of the window; the server defaults to now.
            end: Upper bound of the window; the server defaults to three
                months after ``start``.
            limit: Maximum number of events to return.
        """
        params: dict[str, str] = {}
        if start is not None:
            params["startDate"] = start.isoformat()
        if end is not None:
            params["endDate"] = end.isoformat()
        if limit is not None:
            params["limit"] = str(limit)
        return _parse_events(await self._request(CALENDAR_EVENTS_ENDPOINT, params=params))

    # ------------------------------------------------------------------ #
    #  Internal HTTP layer
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Execute a GET request with throttling and serialization.

        Incoming JSON responses are decamelized.

        Raises:
            RateLimitError: On 429 responses.
            ApiResponseError: On other non-2xx responses.
            ApiConnectionError: On network errors.
        """
        await self._throttle.acquire()

        kwargs: dict[str, Any] = {"headers": {"Accept": "application/json"}}
        if params:
            kwargs["params"] = params

        url = f"{self._config.base_url}{path}"
        try:
            async with self._session.get(url, **kwargs) as resp:
                if resp.status == 429:
                    raise RateLimitError(
                        retry_after=_retry_after(resp.headers.get("Retry-After")),
                    )

                if resp.status == 204:
                    return None

                if resp.status >= 400:
                    body = await resp.text()
                    raise ApiResponseError(
                        f"API error: HTTP {resp.status} - {body}",
                        status_code=resp.status,
                    )

                data = await resp.json()
                return decamelize(data)

        except aiohttp.ClientError as err:
            raise ApiConnectionError(f"Connection error: {err}") from err


def _retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds; HTTP-dates are ignored."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_events(data: Any) -> list[Event]:
    """Parse a collection response, dropping records that fail validation."""
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        return []

    events: list[Event] = []
    for record in data:
        try:
            events.append(Event.from_api_response(record))
        except InvalidEventError as err:
            _LOGGER.warning("Skipping invalid event record: %s", err)
    return events
