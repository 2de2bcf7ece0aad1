"""Data models for Hill Country API responses and calendar display."""

from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Mapping

import voluptuous as vol
from dateutil.parser import isoparse

from .exceptions import InvalidEventError


class RecurrencePattern(str, enum.Enum):
    """Recurrence patterns the calendar knows how to expand."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


def _timestamp(value: Any) -> datetime:
    """Coerce an API timestamp into a ``datetime``.

    Accepts ISO 8601 strings, ``datetime``/``date`` objects and Unix
    milliseconds. Fragments such as ``"15"`` or ``"10:00"`` are rejected
    rather than completed from today's date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, bool):
        raise vol.Invalid("boolean is not a timestamp")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as err:
            raise vol.Invalid(f"timestamp out of range: {value}") from err
    if isinstance(value, str) and value.strip():
        try:
            return isoparse(value.strip())
        except (ValueError, OverflowError) as err:
            raise vol.Invalid(f"unparsable timestamp: {value!r}") from err
    raise vol.Invalid(f"not a timestamp: {value!r}")


EVENT_SCHEMA = vol.Schema(
    {
        vol.Required("id"): vol.Any(int, str),
        vol.Required("start_date"): _timestamp,
        vol.Required("end_date"): _timestamp,
        vol.Optional("is_recurring", default=False): vol.Any(None, vol.Boolean()),
        vol.Optional("recurrence_pattern", default=None): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class Event:
    """A tourism event as served by ``/api/events``."""

    id: str
    name: str
    start_date: datetime
    end_date: datetime
    is_recurring: bool = False
    recurrence_pattern: RecurrencePattern | None = None
    raw_recurrence_pattern: str | None = None
    slug: str = ""
    description: str = ""
    short_description: str = ""
    image_url: str | None = None
    location: str = ""
    category: str = ""
    destination_id: int | None = None
    featured: bool = False
    video_url: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.start_date, datetime) and isinstance(self.end_date, datetime):
            start, end = _align_timezones(self.start_date, self.end_date)
            object.__setattr__(self, "start_date", start)
            object.__setattr__(self, "end_date", end)

    @classmethod
    def from_api_response(cls, data: Mapping[str, Any]) -> Event:
        """Construct from a decamelized API response dict.

        Raises:
            InvalidEventError: If the record is not a mapping, or its id,
                start or end date are missing or unparsable.
        """
        if not isinstance(data, Mapping):
            raise InvalidEventError(f"Event record must be a mapping, got {type(data).__name__}")
        try:
            valid = EVENT_SCHEMA(dict(data))
        except vol.Invalid as err:
            raise InvalidEventError(
                f"Invalid event {data.get('id', '?')}: {err}"
            ) from err

        raw_pattern = valid["recurrence_pattern"]
        return cls(
            id=str(valid["id"]),
            name=data.get("name") or data.get("title") or "",
            start_date=valid["start_date"],
            end_date=valid["end_date"],
            is_recurring=bool(valid["is_recurring"]),
            recurrence_pattern=_parse_pattern(raw_pattern),
            raw_recurrence_pattern=raw_pattern,
            slug=data.get("slug") or "",
            description=data.get("description") or "",
            short_description=data.get("short_description") or "",
            image_url=data.get("image_url"),
            location=data.get("location") or "",
            category=data.get("category") or "",
            destination_id=data.get("destination_id"),
            featured=bool(data.get("featured")),
            video_url=data.get("video_url"),
        )

    @property
    def repeats(self) -> bool:
        """Whether this event expands to more than its anchor date."""
        return self.is_recurring and self.recurrence_pattern is not None


@dataclass(frozen=True, order=True)
class DisplayMonth:
    """A calendar month (1-based month number) shown by a calendar view."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not date.min.year <= self.year <= date.max.year:
            raise ValueError(f"year out of range: {self.year}")

    @classmethod
    def of(cls, day: date) -> DisplayMonth:
        """Return the month containing ``day``."""
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, value: str) -> DisplayMonth:
        """Parse a ``YYYY-MM`` string."""
        try:
            year, month = value.strip().split("-")
            return cls(int(year), int(month))
        except ValueError as err:
            raise ValueError(f"expected YYYY-MM, got {value!r}") from err

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def days(self) -> list[date]:
        """All dates in the month, in order."""
        first = self.first_day
        return [first + timedelta(days=i) for i in range(self.last_day.day)]

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def next(self) -> DisplayMonth:
        if self.month == 12:
            return DisplayMonth(self.year + 1, 1)
        return DisplayMonth(self.year, self.month + 1)

    def previous(self) -> DisplayMonth:
        if self.month == 1:
            return DisplayMonth(self.year - 1, 12)
        return DisplayMonth(self.year, self.month - 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Occurrence:
    """One concrete calendar date on which an event is shown."""

    day: date
    event: Event


def _parse_pattern(value: str | None) -> RecurrencePattern | None:
    """Parse a recurrence pattern, returning None for unsupported values."""
    if value is None:
        return None
    try:
        return RecurrencePattern(value.strip().lower())
    except ValueError:
        return None


def _align_timezones(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """Make start and end comparable; a naive side is taken as UTC."""
    if (start.tzinfo is None) == (end.tzinfo is None):
        return start, end
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    else:
        end = end.replace(tzinfo=timezone.utc)
    return start, end
