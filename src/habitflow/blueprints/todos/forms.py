"""Todo form definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.todo import RecurringType, TodoPriority


def _local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # Stored deadlines are local wall-clock times without an offset.
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class RecurringRule(BaseModel):
    type: RecurringType
    times: int = Field(ge=1, le=31)


class TodoForm(BaseModel):
    """Payload for creating a todo."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(max_length=200)
    description: str = Field(default="", max_length=2000)
    deadline: datetime
    priority: TodoPriority = TodoPriority.MEDIUM
    recurring: Optional[RecurringRule] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a todo title.")
        return value

    @field_validator("deadline")
    @classmethod
    def localize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _local_naive(value)

    def to_columns(self) -> dict:
        columns = self.model_dump(exclude={"recurring"})
        columns["recurring_type"] = self.recurring.type if self.recurring else None
        columns["recurring_times"] = self.recurring.times if self.recurring else None
        return columns


class TodoUpdateForm(BaseModel):
    """Partial payload for editing a todo."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    deadline: Optional[datetime] = None
    priority: Optional[TodoPriority] = None
    recurring: Optional[RecurringRule] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError("Please provide a todo title.")
        return value

    @field_validator("deadline")
    @classmethod
    def localize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _local_naive(value)

    def changes(self) -> dict:
        """Column updates for the fields the client sent; ``recurring: null`` clears the rule."""

        sent = self.model_fields_set
        columns = {
            key: getattr(self, key)
            for key in ("title", "description", "deadline", "priority")
            if key in sent and getattr(self, key) is not None
        }
        if "recurring" in sent:
            columns["recurring_type"] = self.recurring.type if self.recurring else None
            columns["recurring_times"] = self.recurring.times if self.recurring else None
        return columns


__all__ = ["RecurringRule", "TodoForm", "TodoUpdateForm"]
