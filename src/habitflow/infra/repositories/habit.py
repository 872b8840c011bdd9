"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from sqlmodel import Session, or_, select

from ...models.habit import Habit, HabitStatus

# Columns callers may change through ``update_fields``.
EDITABLE_FIELDS = frozenset(
    {"title", "recurrence", "weekdays", "time_of_day", "status", "streak", "last_completed_date"}
)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _owned(session: Session, habit_id: int, user_id: str) -> Optional[Habit]:
        return session.exec(
            select(Habit).where(
                Habit.id == habit_id,
                Habit.user_id == user_id,
                Habit.is_deleted == False,  # noqa: E712
            )
        ).first()

    def get_by_id(self, habit_id: int, *, user_id: str) -> Optional[Habit]:
        """Retrieve a non-deleted habit by ID."""
        with self.session_factory() as session:
            obj = self._owned(session, habit_id, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[Habit]:
        """List non-deleted habits, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .where(Habit.is_deleted == False)  # noqa: E712
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        """Create a new habit in the Todo state with an empty streak."""
        with self.session_factory() as session:
            habit.user_id = user_id
            habit.status = HabitStatus.TODO
            habit.streak = 0
            habit.is_deleted = False
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update_fields(self, habit_id: int, changes: dict[str, Any], *, user_id: str) -> Optional[Habit]:
        """Apply ``changes`` to a habit in a single write."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update habit fields: {', '.join(sorted(unknown))}")

        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None
            for key, value in changes.items():
                setattr(habit, key, value)
            habit.updated_at = datetime.now()
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def soft_delete(self, habit_id: int, *, user_id: str) -> bool:
        """Flag a habit as deleted; the row is kept."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return False
            habit.is_deleted = True
            habit.updated_at = datetime.now()
            session.add(habit)
            session.commit()
            return True

    def complete(
        self,
        habit_id: int,
        *,
        user_id: str,
        compute: Callable[[Habit], dict[str, Any]],
    ) -> Optional[Habit]:
        """Write the changes ``compute`` derives from the stored habit.

        The read and the write share one transaction.
        """
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None
            changes = compute(habit)
            unknown = set(changes) - EDITABLE_FIELDS
            if unknown:
                raise ValueError(f"Cannot update habit fields: {', '.join(sorted(unknown))}")
            for key, value in changes.items():
                setattr(habit, key, value)
            habit.updated_at = datetime.now()
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def rollover(self, *, before: datetime, user_id: Optional[str] = None) -> int:
        """Return Done habits last completed before ``before`` to Todo."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.status == HabitStatus.DONE)
                .where(Habit.is_deleted == False)  # noqa: E712
                .where(
                    or_(
                        Habit.last_completed_date == None,  # noqa: E711
                        Habit.last_completed_date < before,
                    )
                )
            )
            if user_id is not None:
                statement = statement.where(Habit.user_id == user_id)

            habits = list(session.exec(statement).all())
            stamp = datetime.now()
            for habit in habits:
                habit.status = HabitStatus.TODO
                habit.updated_at = stamp
                session.add(habit)
            session.commit()
            return len(habits)
