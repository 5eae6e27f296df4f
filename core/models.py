from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

DAY_OF_MONTH = "day_of_month"
DAY_OF_WEEK = "day_of_week"

Weekday = Annotated[int, Field(ge=0, le=6)]


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class DayOfMonth(BaseModel):
    """Repeat on a fixed day number, e.g. the 15th."""

    model_config = ConfigDict(frozen=True)

    type: Literal["day_of_month"] = DAY_OF_MONTH
    day: int = Field(ge=1, le=31)


class DayOfWeekInMonth(BaseModel):
    """Repeat on the n-th weekday of the month, e.g. the third Tuesday."""

    model_config = ConfigDict(frozen=True)

    type: Literal["day_of_week"] = DAY_OF_WEEK
    # The picker offers first..fourth; 5 comes from start dates on days 29-31.
    week_order: int = Field(ge=1, le=5)
    day_of_week: Weekday


MonthlyMode = Annotated[Union[DayOfMonth, DayOfWeekInMonth], Field(discriminator="type")]


class RecurrenceRule(BaseModel):
    """Description of how a date repeats. Weekdays are Sunday=0 .. Saturday=6."""

    model_config = ConfigDict(frozen=True)

    frequency: Frequency
    interval: int = Field(default=1, ge=1)
    days_of_week: frozenset[Weekday] = Field(default_factory=frozenset)
    monthly: MonthlyMode
    start_date: date
    end_date: date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_serializer("days_of_week")
    def _sorted_weekdays(self, value: frozenset[int]) -> list[int]:
        return sorted(value)
