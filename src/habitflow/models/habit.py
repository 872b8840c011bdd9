"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class Recurrence(str, Enum):
    """Cadence rule deciding on which calendar days a habit is due."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TimeOfDay(str, Enum):
    """Display grouping tag; listed in display order."""

    MORNING = "Morning"
    LUNCH = "Lunch"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    DAILY = "Daily"


class HabitStatus(str, Enum):
    """Completion state of a habit's current occurrence."""

    TODO = "Todo"
    DONE = "Done"


WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class Habit(SQLModel, table=True):
    """A recurring commitment owned by a single user."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=128)
    title: str = Field(nullable=False, max_length=120)
    recurrence: Recurrence = Field(default=Recurrence.DAILY, nullable=False)
    weekdays: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    time_of_day: TimeOfDay = Field(default=TimeOfDay.DAILY, nullable=False)
    status: HabitStatus = Field(default=HabitStatus.TODO, nullable=False, index=True)
    streak: int = Field(default=0, nullable=False, ge=0)
    # Timestamps are naive local wall-clock times.
    last_completed_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    is_deleted: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )

    def to_dict(self) -> dict:
        """Serialize for JSON responses."""

        return {
            "id": self.id,
            "title": self.title,
            "recurrence": Recurrence(self.recurrence).value,
            "weekdays": list(self.weekdays or []),
            "time_of_day": TimeOfDay(self.time_of_day).value,
            "status": HabitStatus(self.status).value,
            "streak": self.streak,
            "last_completed_date": (
                self.last_completed_date.isoformat() if self.last_completed_date else None
            ),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
