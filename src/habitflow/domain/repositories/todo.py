"""Todo repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.todo import Todo


class TodoRepository(Protocol):
    """Repository for managing todo entities of a single user."""

    def get_by_id(self, todo_id: int, *, user_id: str) -> Optional[Todo]:
        ...

    def list_all(self, *, user_id: str) -> list[Todo]:
        ...

    def create(self, todo: Todo, *, user_id: str) -> Todo:
        ...

    def update_fields(self, todo_id: int, changes: dict[str, Any], *, user_id: str) -> Optional[Todo]:
        ...

    def soft_delete(self, todo_id: int, *, user_id: str) -> bool:
        ...
