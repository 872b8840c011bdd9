"""Habit use cases: today's board, completion, undo and the daily rollover."""

from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional

from ..domain.repositories.habit import HabitRepository
from ..errors import NotFoundError
from ..models.habit import Habit, HabitStatus
from .recurrence import HabitGroup, count_hidden_weekly, filter_due_today, group_by_time_of_day
from .records import reference_date
from .streaks import completion_update, effective_streak

logger = logging.getLogger("habitflow.services.habits")


@dataclass
class TodayBoard:
    """Habits to show for one day, grouped by time of day."""

    day: date
    groups: list[HabitGroup]
    hidden_weekly: int
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "hidden_weekly": self.hidden_weekly,
            "total": self.total,
            "groups": [
                {
                    "time_of_day": group.time_of_day.value,
                    "habits": [
                        {**habit.to_dict(), "streak": effective_streak(habit, self.day)}
                        for habit in group.habits
                    ],
                }
                for group in self.groups
            ],
        }


class HabitService:
    """Coordinates the streak rules with persistence.

    Completions of the same habit are serialized with a per-habit lock and the
    read-compute-write happens inside one repository transaction, so concurrent
    requests cannot both increment from the same stored streak.
    """

    def __init__(self, repo: HabitRepository):
        self.repo = repo
        # Entries vanish once no caller holds the lock.
        self._locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, habit_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(habit_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[habit_id] = lock
            return lock

    def today_board(self, user_id: str, today: date | datetime | None = None) -> TodayBoard:
        """Build the grouped list of habits due on ``today``."""

        day = reference_date(today)
        habits = self.repo.list_all(user_id=user_id)
        due = filter_due_today(habits, day)
        return TodayBoard(
            day=day,
            groups=group_by_time_of_day(due),
            hidden_weekly=count_hidden_weekly(habits, day),
            total=len(habits),
        )

    def get(self, habit_id: int, user_id: str) -> Habit:
        habit = self.repo.get_by_id(habit_id, user_id=user_id)
        if habit is None:
            raise NotFoundError("Habit", habit_id)
        return habit

    def complete(self, habit_id: int, user_id: str, now: Optional[datetime] = None) -> Habit:
        """Mark a habit done now and persist the new streak."""

        moment = now or datetime.now()
        with self._lock_for(habit_id):
            habit = self.repo.complete(
                habit_id,
                user_id=user_id,
                compute=lambda stored: completion_update(stored, moment),
            )
        if habit is None:
            raise NotFoundError("Habit", habit_id)
        logger.info(
            "Habit completed",
            extra={
                "habit_id": habit_id,
                "user_id": user_id,
                "streak": habit.streak,
                "completed_at": moment,
            },
        )
        return habit

    def reopen(self, habit_id: int, user_id: str) -> Habit:
        """Flip a habit back to Todo; the streak and last completion are kept."""

        with self._lock_for(habit_id):
            habit = self.repo.update_fields(
                habit_id, {"status": HabitStatus.TODO}, user_id=user_id
            )
        if habit is None:
            raise NotFoundError("Habit", habit_id)
        return habit

    def toggle(self, habit_id: int, user_id: str, now: Optional[datetime] = None) -> Habit:
        """Complete a Todo habit, or reopen a Done one."""

        habit = self.get(habit_id, user_id)
        if habit.status == HabitStatus.DONE:
            return self.reopen(habit_id, user_id)
        return self.complete(habit_id, user_id, now)

    def rollover(self, today: date | datetime | None = None, user_id: Optional[str] = None) -> int:
        """Reset habits completed before ``today`` to Todo.

        Streaks are not modified; the display decays through ``effective_streak``
        and the next completion recomputes the stored value.
        """

        cutoff = datetime.combine(reference_date(today), time.min)
        count = self.repo.rollover(before=cutoff, user_id=user_id)
        logger.info(
            "Daily rollover finished", extra={"cutoff": cutoff, "reset": count, "user_id": user_id}
        )
        return count


__all__ = ["HabitService", "TodayBoard"]
