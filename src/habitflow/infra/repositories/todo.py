"""SQLModel implementation of Todo repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from sqlmodel import Session, select

from ...models.habit import HabitStatus
from ...models.todo import Todo

EDITABLE_FIELDS = frozenset(
    {"title", "description", "deadline", "status", "priority", "recurring_type", "recurring_times"}
)


class SQLModelTodoRepository:
    """SQLModel-based todo repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    @staticmethod
    def _owned(session: Session, todo_id: int, user_id: str) -> Optional[Todo]:
        return session.exec(
            select(Todo).where(
                Todo.id == todo_id,
                Todo.user_id == user_id,
                Todo.is_deleted == False,  # noqa: E712
            )
        ).first()

    def get_by_id(self, todo_id: int, *, user_id: str) -> Optional[Todo]:
        with self.session_factory() as session:
            obj = self._owned(session, todo_id, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[Todo]:
        """List non-deleted todos, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Todo)
                .where(Todo.user_id == user_id)
                .where(Todo.is_deleted == False)  # noqa: E712
                .order_by(Todo.created_at.desc(), Todo.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, todo: Todo, *, user_id: str) -> Todo:
        with self.session_factory() as session:
            todo.user_id = user_id
            todo.status = HabitStatus.TODO
            todo.is_deleted = False
            session.add(todo)
            session.commit()
            session.refresh(todo)
            session.expunge(todo)
            return todo

    def update_fields(self, todo_id: int, changes: dict[str, Any], *, user_id: str) -> Optional[Todo]:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update todo fields: {', '.join(sorted(unknown))}")

        with self.session_factory() as session:
            todo = self._owned(session, todo_id, user_id)
            if todo is None:
                return None
            for key, value in changes.items():
                setattr(todo, key, value)
            todo.updated_at = datetime.now()
            session.add(todo)
            session.commit()
            session.refresh(todo)
            session.expunge(todo)
            return todo

    def soft_delete(self, todo_id: int, *, user_id: str) -> bool:
        with self.session_factory() as session:
            todo = self._owned(session, todo_id, user_id)
            if todo is None:
                return False
            todo.is_deleted = True
            todo.updated_at = datetime.now()
            session.add(todo)
            session.commit()
            return True
