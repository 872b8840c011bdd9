"""Consecutive-day completion streaks with reset-on-gap semantics.

All comparisons are by calendar date, never by elapsed time: a completion at
23:59 yesterday checked at 00:01 today still counts as "yesterday".
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from ..models.habit import HabitStatus
from .records import calendar_date, field, reference_date


def _stored_streak(habit: Any) -> int:
    try:
        value = int(field(habit, "streak", 0) or 0)
    except (TypeError, ValueError):
        return 0
    return max(value, 0)


def should_reset_streak(habit: Any, today: date | datetime | None = None) -> bool:
    """Return True unless the habit was last completed exactly yesterday."""

    last = calendar_date(field(habit, "last_completed_date"))
    if last is None:
        return True
    return last != reference_date(today) - timedelta(days=1)


def effective_streak(habit: Any, today: date | datetime | None = None) -> int:
    """Streak to display right now.

    A habit marked done shows its stored streak. Otherwise a gap since the last
    completion displays as 0; the stored record is left untouched.
    """

    if field(habit, "status") == HabitStatus.DONE:
        return _stored_streak(habit)
    if should_reset_streak(habit, today):
        return 0
    return _stored_streak(habit)


def record_completion(habit: Any, today: date | datetime | None = None) -> int:
    """Return the streak to persist when the habit is completed on ``today``."""

    last = calendar_date(field(habit, "last_completed_date"))
    if last is None:
        return 1

    day = reference_date(today)
    if last == day - timedelta(days=1):
        return _stored_streak(habit) + 1
    if last == day:
        # Re-completion on the same day never double counts.
        return _stored_streak(habit)
    return 1


def completion_update(habit: Any, now: datetime | None = None) -> dict[str, Any]:
    """Build the single write that marks ``habit`` done at ``now``.

    ``status``, ``streak`` and ``last_completed_date`` must be persisted together.
    An aware ``now`` is stored as naive local time.
    """

    moment = now or datetime.now()
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return {
        "status": HabitStatus.DONE,
        "streak": record_completion(habit, moment),
        "last_completed_date": moment,
    }


__all__ = [
    "completion_update",
    "effective_streak",
    "record_completion",
    "should_reset_streak",
]
