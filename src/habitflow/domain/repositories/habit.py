"""Habit repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Repository for managing habit entities of a single user."""

    def get_by_id(self, habit_id: int, *, user_id: str) -> Optional[Habit]:
        """Retrieve a non-deleted habit by ID."""
        ...

    def list_all(self, *, user_id: str) -> list[Habit]:
        """List non-deleted habits, newest first."""
        ...

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        """Create a new habit."""
        ...

    def update_fields(self, habit_id: int, changes: dict[str, Any], *, user_id: str) -> Optional[Habit]:
        """Apply ``changes`` in one write; None when the habit is missing."""
        ...

    def soft_delete(self, habit_id: int, *, user_id: str) -> bool:
        """Flag a habit as deleted."""
        ...

    def complete(
        self,
        habit_id: int,
        *,
        user_id: str,
        compute: Callable[[Habit], dict[str, Any]],
    ) -> Optional[Habit]:
        """Apply ``compute(stored_habit)`` to the habit inside one transaction."""
        ...

    def rollover(self, *, before: datetime, user_id: Optional[str] = None) -> int:
        """Return habits completed before ``before`` to Todo; returns the count."""
        ...
