"""Service module exports."""

from . import coach, habits, recurrence, reports, streaks

__all__ = ["coach", "habits", "recurrence", "reports", "streaks"]
