"""Habit form definitions."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.habit import WEEKDAY_NAMES, Recurrence, TimeOfDay


def _normalize_weekdays(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    days: list[str] = []
    for part in value:
        day = str(part).strip().lower()
        if not day:
            continue
        if day not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday '{part}'.")
        if day not in days:
            days.append(day)
    return days


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: str = Field(max_length=120, description="Short label for the habit")
    recurrence: Recurrence = Field(default=Recurrence.DAILY)
    weekdays: list[str] = Field(default_factory=list, description="Weekdays for weekly habits")
    time_of_day: TimeOfDay = Field(default=TimeOfDay.DAILY, alias="timeOfDay")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("weekdays", mode="before")
    @classmethod
    def split_weekdays(cls, value: str | Iterable[str] | None) -> list[str]:
        """Accept comma-separated strings or lists, in any letter case."""

        return _normalize_weekdays(value)


class HabitUpdateForm(BaseModel):
    """Partial payload for editing a habit; omitted fields stay unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: Optional[str] = Field(default=None, max_length=120)
    recurrence: Optional[Recurrence] = None
    weekdays: Optional[list[str]] = None
    time_of_day: Optional[TimeOfDay] = Field(default=None, alias="timeOfDay")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("weekdays", mode="before")
    @classmethod
    def split_weekdays(cls, value: str | Iterable[str] | None) -> Optional[list[str]]:
        if value is None:
            return None
        return _normalize_weekdays(value)

    def changes(self) -> dict:
        """Return only the fields the client sent with a value."""

        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


__all__ = ["HabitForm", "HabitUpdateForm"]
