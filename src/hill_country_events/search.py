"""Route free-text search phrases to a content collection."""

from __future__ import annotations

import enum
from datetime import date
from typing import Final
from urllib.parse import urlencode


class Collection(str, enum.Enum):
    """Browsable content collections on the site."""

    EVENTS = "events"
    CABINS = "cabins"
    ATTRACTIONS = "attractions"
    DESTINATIONS = "destinations"

    @property
    def path(self) -> str:
        return f"/{self.value}"


# Tested in order; the first collection with a matching keyword wins.
ROUTING_TABLE: Final[tuple[tuple[Collection, tuple[str, ...]], ...]] = (
    (Collection.EVENTS, ("event", "festival", "concert")),
    (Collection.CABINS, ("cabin", "stay", "lodging")),
    (Collection.ATTRACTIONS, ("attraction", "visit", "see")),
)

DEFAULT_COLLECTION: Final = Collection.DESTINATIONS


def route_query(query: str) -> Collection:
    """Return the collection a search phrase should be sent to.

    Keywords are matched as substrings of the lowercased phrase, so
    "Festivals" and "sightseeing" both match.
    """
    phrase = query.lower()
    for collection, keywords in ROUTING_TABLE:
        if any(keyword in phrase for keyword in keywords):
            return collection
    return DEFAULT_COLLECTION


def search_location(query: str, *, on: date | str | None = None) -> str | None:
    """Build the site location for a search, e.g. ``/events?q=rodeo``.

    Returns None for an empty query. Whitespace is a query like any other
    and routes to destinations.
    """
    if not query:
        return None

    params = {"q": query}
    if on:
        params["date"] = on.isoformat() if isinstance(on, date) else on
    return f"{route_query(query).path}?{urlencode(params)}"
