"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .todo import TodoRepository

__all__ = ["HabitRepository", "TodoRepository"]
