"""SQLModel table exports."""

from .habit import WEEKDAY_NAMES, Habit, HabitStatus, Recurrence, TimeOfDay
from .todo import RecurringType, Todo, TodoPriority

__all__ = [
    "Habit",
    "HabitStatus",
    "Recurrence",
    "RecurringType",
    "TimeOfDay",
    "Todo",
    "TodoPriority",
    "WEEKDAY_NAMES",
]
