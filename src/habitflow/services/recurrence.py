"""Decide which habits are due on a given day and group them for display."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dc_field
from datetime import date, datetime
from typing import Any, Iterable

from ..models.habit import WEEKDAY_NAMES, Recurrence, TimeOfDay
from .records import field, reference_date

logger = logging.getLogger("habitflow.services.recurrence")


@dataclass
class HabitGroup:
    """Habits sharing a time-of-day tag, in display order."""

    time_of_day: TimeOfDay
    habits: list[Any] = dc_field(default_factory=list)


def weekday_name(today: date | datetime | None = None) -> str:
    """Return the lowercase English weekday name of ``today``."""

    return WEEKDAY_NAMES[reference_date(today).weekday()]


def _weekdays(habit: Any) -> set[str]:
    raw = field(habit, "weekdays") or ()
    if isinstance(raw, str):
        raw = (raw,)
    return {str(day).strip().lower() for day in raw}


def _is_weekly(habit: Any) -> bool:
    return field(habit, "recurrence") == Recurrence.WEEKLY


def is_due_today(habit: Any, today: date | datetime | None = None) -> bool:
    """Return whether ``habit`` should be surfaced on ``today``.

    Daily and monthly habits are always due; monthly habits carry no
    day-of-month. Weekly habits are due on their listed weekdays, or every day
    when none are listed.
    """

    if not _is_weekly(habit):
        return True
    weekdays = _weekdays(habit)
    if not weekdays:
        return True
    return weekday_name(today) in weekdays


def filter_due_today(habits: Iterable[Any], today: date | datetime | None = None) -> list[Any]:
    """Return the habits due on ``today`` in their original order."""

    day = reference_date(today)
    return [habit for habit in habits if is_due_today(habit, day)]


def count_hidden_weekly(habits: Iterable[Any], today: date | datetime | None = None) -> int:
    """Count weekly habits with explicit weekdays that are suppressed on ``today``."""

    current = weekday_name(today)
    hidden = 0
    for habit in habits:
        if not _is_weekly(habit):
            continue
        weekdays = _weekdays(habit)
        if weekdays and current not in weekdays:
            hidden += 1
    return hidden


def group_by_time_of_day(habits: Iterable[Any]) -> list[HabitGroup]:
    """Bucket habits by time of day in the fixed display order.

    Empty buckets are omitted. Habits carrying an unknown tag are left out of
    the result.
    """

    buckets: dict[TimeOfDay, list[Any]] = {slot: [] for slot in TimeOfDay}
    for habit in habits:
        raw = field(habit, "time_of_day")
        try:
            slot = TimeOfDay(raw)
        except (TypeError, ValueError):
            logger.debug("Dropping habit %r with unknown time of day %r", field(habit, "id"), raw)
            continue
        buckets[slot].append(habit)

    return [HabitGroup(slot, items) for slot, items in buckets.items() if items]


__all__ = [
    "HabitGroup",
    "count_hidden_weekly",
    "filter_due_today",
    "group_by_time_of_day",
    "is_due_today",
    "weekday_name",
]
