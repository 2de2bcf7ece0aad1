"""Event calendar helpers for the Hill Country tourism site."""

from .const import __version__
from ._client import HillCountryApiClient
from .calendar import DayMarker, events_on_day, group_by_day, month_markers, month_weeks
from .config import CalendarConfig
from .exceptions import (
    ApiConnectionError,
    ApiResponseError,
    ConfigError,
    EventNotFoundError,
    HillCountryError,
    InvalidEventError,
    RateLimitError,
)
from .models import DisplayMonth, Event, Occurrence, RecurrencePattern
from .recurrence import expand_month, expand_occurrences
from .search import Collection, route_query, search_location
from .store import EventStore

__all__ = [
    "__version__",
    "HillCountryApiClient",
    "EventStore",
    "CalendarConfig",
    "ApiConnectionError",
    "ApiResponseError",
    "ConfigError",
    "EventNotFoundError",
    "HillCountryError",
    "InvalidEventError",
    "RateLimitError",
    "DisplayMonth",
    "Event",
    "Occurrence",
    "RecurrencePattern",
    "expand_month",
    "expand_occurrences",
    "DayMarker",
    "events_on_day",
    "group_by_day",
    "month_markers",
    "month_weeks",
    "Collection",
    "route_query",
    "search_location",
]
