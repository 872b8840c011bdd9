"""Todo (one-off task) data structures."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .habit import HabitStatus


class TodoPriority(str, Enum):
    """Priority levels shown next to a todo."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RecurringType(str, Enum):
    """Repeat window for a recurring todo."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Todo(SQLModel, table=True):
    """A task with a deadline, owned by a single user."""

    __tablename__: ClassVar[str] = "todo"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=128)
    title: str = Field(nullable=False, max_length=200)
    description: str = Field(default="", max_length=2000)
    deadline: datetime = Field(nullable=False, index=True, sa_type=DateTime(timezone=False))
    status: HabitStatus = Field(default=HabitStatus.TODO, nullable=False)
    priority: TodoPriority = Field(default=TodoPriority.MEDIUM, nullable=False)
    recurring_type: Optional[RecurringType] = Field(default=None)
    recurring_times: Optional[int] = Field(default=None, ge=1)
    is_deleted: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )

    def to_dict(self) -> dict:
        """Serialize for JSON responses."""

        recurring = None
        if self.recurring_type is not None:
            recurring = {
                "type": RecurringType(self.recurring_type).value,
                "times": self.recurring_times,
            }
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "status": HabitStatus(self.status).value,
            "priority": TodoPriority(self.priority).value,
            "recurring": recurring,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
