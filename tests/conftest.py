"""Shared fixtures: event factories and an in-process fake of the site API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from hill_country_events import CalendarConfig, Event, HillCountryApiClient
from hill_country_events.models import RecurrencePattern


# --------------------------------------------------------------------------- #
#  Event factories
# --------------------------------------------------------------------------- #


def _make_event(
    *,
    event_id: str = "1",
    name: str = "Test Event",
    start: datetime = datetime(2024, 1, 10, 18, 0),
    end: datetime | None = None,
    pattern: RecurrencePattern | None = None,
    is_recurring: bool | None = None,
    slug: str | None = None,
) -> Event:
    return Event(
        id=event_id,
        name=name,
        start_date=start,
        end_date=end if end is not None else start,
        is_recurring=pattern is not None if is_recurring is None else is_recurring,
        recurrence_pattern=pattern,
        raw_recurrence_pattern=pattern.value if pattern else None,
        slug=slug if slug is not None else f"event-{event_id}",
    )


def _make_record(**overrides: Any) -> dict[str, Any]:
    """A camelCase record shaped like the ``/api/events`` payload."""
    record: dict[str, Any] = {
        "id": 1,
        "name": "Bluebonnet Festival",
        "slug": "bluebonnet-festival",
        "description": "Wildflowers, music and food trucks.",
        "shortDescription": "Wildflowers and music.",
        "imageUrl": "/images/events/bluebonnet.jpg",
        "startDate": "2024-04-13T10:00:00.000Z",
        "endDate": "2024-04-14T18:00:00.000Z",
        "location": "Burnet, TX",
        "destinationId": 3,
        "category": "festival",
        "featured": True,
        "videoUrl": None,
        "isRecurring": False,
        "recurrencePattern": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_event() -> Callable[..., Event]:
    return _make_event


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    return _make_record


# --------------------------------------------------------------------------- #
#  Fake site API
# --------------------------------------------------------------------------- #


@dataclass
class FakeSite:
    """State behind the fake ``/api`` routes."""

    events: list[dict[str, Any]] = field(default_factory=list)
    calendar_events: list[dict[str, Any]] = field(default_factory=list)
    fail_status: int | None = None
    retry_after: str | None = None
    requests: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    def count(self, path: str) -> int:
        return sum(1 for p, _ in self.requests if p == path)


def _build_app(site: FakeSite) -> web.Application:
    async def record(request: web.Request) -> web.Response | None:
        """Log the request; return the forced failure response, if any."""
        site.requests.append((request.path, dict(request.query)))
        if site.fail_status is None:
            return None
        headers = {"Retry-After": site.retry_after} if site.retry_after else None
        return web.Response(status=site.fail_status, text="boom", headers=headers)

    async def all_events(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        return web.json_response(site.events)

    async def featured(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        return web.json_response([e for e in site.events if e.get("featured")])

    async def upcoming(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        limit = int(request.query.get("limit", "5"))
        ordered = sorted(site.events, key=lambda e: str(e.get("startDate")))
        return web.json_response(ordered[:limit])

    async def by_slug(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        for event in site.events:
            if event.get("slug") == request.match_info["slug"]:
                return web.json_response(event)
        return web.json_response({"message": "Event not found"}, status=404)

    async def by_destination(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        destination_id = int(request.match_info["destination_id"])
        return web.json_response(
            [e for e in site.events if e.get("destinationId") == destination_id]
        )

    async def calendar_feed(request: web.Request) -> web.StreamResponse:
        failure = await record(request)
        if failure is not None:
            return failure
        return web.json_response(site.calendar_events)

    app = web.Application()
    app.router.add_get("/api/events", all_events)
    app.router.add_get("/api/events/featured", featured)
    app.router.add_get("/api/events/upcoming", upcoming)
    app.router.add_get("/api/events/{slug}", by_slug)
    app.router.add_get("/api/destinations/{destination_id}/events", by_destination)
    app.router.add_get("/api/calendar/events", calendar_feed)
    return app


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture
async def api_server(site: FakeSite):
    server = TestServer(_build_app(site))
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
async def api_client(api_server: TestServer):
    config = CalendarConfig(
        base_url=str(api_server.make_url("/")).rstrip("/"),
        request_interval=0,
    )
    client = HillCountryApiClient(config)
    yield client
    await client.async_close()
