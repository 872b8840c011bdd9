"""Summary numbers for the analytics page."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from ..models.habit import HabitStatus, TimeOfDay
from ..models.todo import TodoPriority
from .records import field
from .streaks import effective_streak


def habit_streaks(habits: Iterable[Any], today: date | datetime | None = None) -> list[dict[str, Any]]:
    """Return ``{title, streak}`` rows using the displayed (effective) streak."""

    return [
        {"title": field(habit, "title"), "streak": effective_streak(habit, today)}
        for habit in habits
    ]


def summarize(
    todos: Iterable[Any],
    habits: Iterable[Any],
    today: date | datetime | None = None,
) -> dict[str, Any]:
    """Aggregate todo and habit counts for charts and headline numbers."""

    todos = list(todos)
    habits = list(habits)
    streaks = habit_streaks(habits, today)

    done = sum(1 for todo in todos if field(todo, "status") == HabitStatus.DONE)
    completion_rate = round(done * 100 / len(todos)) if todos else 0
    average_streak = round(sum(row["streak"] for row in streaks) / len(streaks)) if streaks else 0

    return {
        "todos": {
            "total": len(todos),
            "done": done,
            "completion_rate": completion_rate,
            "by_priority": {
                priority.value: sum(1 for todo in todos if field(todo, "priority") == priority)
                for priority in TodoPriority
            },
        },
        "habits": {
            "total": len(habits),
            "average_streak": average_streak,
            "streaks": streaks,
            "by_time_of_day": {
                slot.value: sum(1 for habit in habits if field(habit, "time_of_day") == slot)
                for slot in TimeOfDay
            },
        },
    }


__all__ = ["habit_streaks", "summarize"]
