"""Uniform read access to habit records.

Habits reach the core either as ``Habit`` model instances or as plain mappings
decoded from JSON/document stores (which often use camelCase keys). The helpers
here hide that difference so the recurrence and streak rules stay pure functions
of plain values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

logger = logging.getLogger("habitflow.services.records")

_CAMEL_ALIASES = {
    "time_of_day": "timeOfDay",
    "last_completed_date": "lastCompletedDate",
    "user_id": "userId",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def field(record: Any, name: str, default: Any = None) -> Any:
    """Return attribute ``name`` of a model instance or mapping."""

    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        alias = _CAMEL_ALIASES.get(name)
        if alias is not None and alias in record:
            return record[alias]
        return default
    return getattr(record, name, default)


def _local_date(moment: datetime) -> date:
    # Aware values are read on the local calendar; naive ones already are local.
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def calendar_date(value: Any) -> date | None:
    """Reduce a timestamp to its local calendar date.

    Accepts ``datetime``, ``date`` and ISO-8601 strings; anything else (including
    an unparseable string) is treated as absent.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return _local_date(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            logger.debug("Ignoring unparseable timestamp %r", value)
            return None
    return None


def reference_date(today: date | datetime | None) -> date:
    """Resolve the injected reference moment, defaulting to the local clock."""

    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return _local_date(today)
    return today


__all__ = ["calendar_date", "field", "reference_date"]
