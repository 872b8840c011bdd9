"""Blueprint exports."""

from . import analytics, chat, habits, todos

__all__ = ["analytics", "chat", "habits", "todos"]
