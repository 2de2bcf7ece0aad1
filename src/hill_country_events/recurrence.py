"""Materialize recurring events into concrete dates for one display month."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Iterable, Mapping, Union
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta
from dateutil.rrule import WEEKLY, rrule

from ._serialization import decamelize
from .exceptions import InvalidEventError
from .models import DisplayMonth, Event, Occurrence, RecurrencePattern

_LOGGER = logging.getLogger(__name__)

EventLike = Union[Event, Mapping[str, Any]]
TimeZoneLike = Union[str, tzinfo, None]


def as_event(record: EventLike) -> Event | None:
    """Return ``record`` as an ``Event``, or None if it cannot be parsed.

    Raw records may use the API's camelCase keys or snake_case keys.
    """
    if isinstance(record, Event):
        return record
    try:
        if not isinstance(record, Mapping):
            raise InvalidEventError(f"Unsupported event record: {type(record).__name__}")
        return Event.from_api_response(decamelize(dict(record)))
    except InvalidEventError:
        _LOGGER.debug("Skipping unparsable event record", exc_info=True)
        return None


def expand_occurrences(
    event: EventLike,
    month: DisplayMonth,
    *,
    tz: TimeZoneLike = None,
) -> frozenset[date]:
    """Return the dates within ``month`` on which ``event`` is shown.

    The anchor date (the day of ``start_date``) is always a candidate.
    Weekly and monthly recurring events are stepped from the anchor while
    the step does not pass ``end_date``; only steps inside ``month`` are
    kept. Records that cannot be parsed contribute no dates.

    Monthly steps are measured from the anchor with ``relativedelta``, so a
    start on the 31st clamps to the last day of shorter months without
    drifting (Jan 31, Feb 29, Mar 31, Apr 30, ...).

    Args:
        event: An ``Event`` or a raw API record.
        month: The display window.
        tz: Zone in which aware timestamps are read as calendar dates.
            Naive timestamps are always used as-is.
    """
    parsed = as_event(event)
    if parsed is None:
        return frozenset()

    zone = _resolve_tz(tz)
    try:
        return frozenset(_expand(parsed, month, zone))
    except (AttributeError, TypeError, ValueError, OverflowError):
        _LOGGER.debug("Skipping event %s with unusable dates", parsed.id, exc_info=True)
        return frozenset()


def _expand(event: Event, month: DisplayMonth, zone: tzinfo | None) -> set[date]:
    start = _localize(event.start_date, zone)
    end = _localize(event.end_date, zone)

    days: set[date] = set()
    anchor = start.date()
    if month.contains(anchor):
        days.add(anchor)

    if not event.is_recurring:
        return days

    if event.recurrence_pattern is RecurrencePattern.WEEKLY:
        days.update(_weekly_steps(start, end, month))
    elif event.recurrence_pattern is RecurrencePattern.MONTHLY:
        days.update(_monthly_steps(start, end, month))
    return days


def expand_month(
    events: Iterable[EventLike],
    month: DisplayMonth,
    *,
    tz: TimeZoneLike = None,
) -> list[Occurrence]:
    """Return every occurrence in ``month``, ordered by day then source order."""
    found: list[tuple[date, int, Event]] = []
    for index, record in enumerate(events):
        event = as_event(record)
        if event is None:
            continue
        for day in expand_occurrences(event, month, tz=tz):
            found.append((day, index, event))
    found.sort(key=lambda item: (item[0], item[1]))
    return [Occurrence(day=day, event=event) for day, _, event in found]


def _weekly_steps(start: datetime, end: datetime, month: DisplayMonth) -> set[date]:
    # Start the rule at the last step on or before the month so its length
    # depends on the month, not on how long ago the event started.
    skipped = max(0, (month.first_day - start.date()).days // 7)
    rule = rrule(WEEKLY, dtstart=start + timedelta(weeks=skipped), until=end)
    window_start = datetime.combine(month.first_day, time.min, tzinfo=start.tzinfo)
    window_end = datetime.combine(month.last_day, time.max, tzinfo=start.tzinfo)
    return {step.date() for step in rule.between(window_start, window_end, inc=True)}


def _monthly_steps(start: datetime, end: datetime, month: DisplayMonth) -> set[date]:
    # Exactly one monthly step can land in a given month.
    months = (month.year - start.year) * 12 + (month.month - start.month)
    if months < 0:
        return set()
    step = start + relativedelta(months=months)
    if step > end:
        return set()
    return {step.date()}


def _resolve_tz(tz: TimeZoneLike) -> tzinfo | None:
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _localize(value: datetime, zone: tzinfo | None) -> datetime:
    if zone is None or value.tzinfo is None:
        return value
    return value.astimezone(zone)
