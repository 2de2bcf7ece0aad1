"""Day lookup and month layout helpers for calendar views."""

from __future__ import annotations

import calendar as _stdlib_calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

from .models import DisplayMonth, Event
from .recurrence import EventLike, TimeZoneLike, as_event, expand_occurrences

_LOGGER = logging.getLogger(__name__)

SUNDAY = _stdlib_calendar.SUNDAY
MONDAY = _stdlib_calendar.MONDAY


@dataclass(frozen=True)
class DayMarker:
    """What a calendar view needs to decorate a single day."""

    day: date
    events: tuple[Event, ...] = field(default_factory=tuple)

    @property
    def has_events(self) -> bool:
        return bool(self.events)

    @property
    def has_recurring(self) -> bool:
        """Whether at least one event lands here through a recurrence pattern."""
        return any(event.repeats for event in self.events)


def events_on_day(
    events: Iterable[EventLike],
    day: date,
    *,
    tz: TimeZoneLike = None,
) -> list[Event]:
    """Return the events occurring on ``day``, in source order.

    Each event is expanded against the month containing ``day``. Records
    that cannot be parsed are skipped.
    """
    month = DisplayMonth.of(day)
    matches: list[Event] = []
    for record in events:
        event = as_event(record)
        if event is None:
            continue
        if day in expand_occurrences(event, month, tz=tz):
            matches.append(event)
    return matches


def group_by_day(
    events: Iterable[EventLike],
    month: DisplayMonth,
    *,
    tz: TimeZoneLike = None,
) -> dict[date, list[Event]]:
    """Expand every event once and group the results by day.

    Only days with at least one event are present. Within a day, events
    keep their source order.
    """
    grouped: dict[date, list[Event]] = {}
    skipped = 0
    for record in events:
        event = as_event(record)
        if event is None:
            skipped += 1
            continue
        for day in expand_occurrences(event, month, tz=tz):
            grouped.setdefault(day, []).append(event)
    if skipped:
        _LOGGER.debug("Skipped %d unparsable event(s) for %s", skipped, month)
    return dict(sorted(grouped.items()))


def month_markers(
    events: Iterable[EventLike],
    month: DisplayMonth,
    *,
    tz: TimeZoneLike = None,
) -> list[DayMarker]:
    """Return one ``DayMarker`` for every day of ``month``."""
    grouped = group_by_day(events, month, tz=tz)
    return [DayMarker(day=day, events=tuple(grouped.get(day, ()))) for day in month.days]


def month_weeks(
    month: DisplayMonth,
    *,
    first_weekday: int = SUNDAY,
) -> list[list[date | None]]:
    """Lay out ``month`` as rows of seven days.

    Positions before the first and after the last day of the month are
    ``None``.
    """
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be in 0..6, got {first_weekday}")

    first = month.first_day
    leading = (first.weekday() - first_weekday) % 7
    cells: list[date | None] = [None] * leading
    cells.extend(first + timedelta(days=i) for i in range(month.last_day.day))
    cells.extend([None] * (-len(cells) % 7))
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]
