"""
Core Data Models for the Habit Tracker

These models define the schemas for habits and categories.
They are designed to:
1. Enforce the data invariants at runtime (weekdays 0-6, ISO date keys)
2. Serialize to the persisted camelCase JSON layout
3. Accept both camelCase (stored) and snake_case (Python) field names

DESIGN DECISION: The store never trusts a dict. Everything read from storage
or handed in by the presentation layer passes through these models first.
"""

import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WeekDay = Annotated[int, Field(ge=0, le=6)]

# 0=Sunday, matching the stored weekDays values
WEEK_DAYS: tuple[tuple[int, str, str], ...] = (
    (0, "Sunday", "Sun"),
    (1, "Monday", "Mon"),
    (2, "Tuesday", "Tue"),
    (3, "Wednesday", "Wed"),
    (4, "Thursday", "Thu"),
    (5, "Friday", "Fri"),
    (6, "Saturday", "Sat"),
)


def parse_iso_date(value: str) -> date:
    """
    Parse a strict ``YYYY-MM-DD`` string.

    Raises ValueError for anything else, including datetimes.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(value)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class Frequency(str, Enum):
    """
    Scheduling mode of a habit.

    DAILY habits are due on every date; WEEKLY habits only on their weekDays.
    """
    DAILY = "daily"
    WEEKLY = "weekly"


class _StoredModel(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_storage_dict(self) -> dict:
        """JSON-ready dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# CATEGORY MODELS
# =============================================================================

class CategoryInput(_StoredModel):
    """Fields a caller supplies when creating a category."""

    name: str = Field(
        ...,
        min_length=1,
        description="Display label"
    )
    color: str = Field(
        ...,
        min_length=1,
        description="Display color token, e.g. #22c55e"
    )


class Category(CategoryInput):
    """A named, colored grouping of habits."""

    id: str = Field(
        ...,
        min_length=1,
        description="Unique category ID, immutable"
    )


class CategoryUpdate(_StoredModel):
    """Partial category update. Only fields explicitly set are applied."""

    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = Field(default=None, min_length=1)


def default_categories() -> list[Category]:
    """The seed categories used when nothing valid is stored."""
    return [
        Category(id="1", name="Health", color="#22c55e"),
        Category(id="2", name="Productivity", color="#3b82f6"),
        Category(id="3", name="Learning", color="#f59e0b"),
        Category(id="4", name="Personal", color="#ec4899"),
    ]


# =============================================================================
# HABIT MODELS
# =============================================================================

def _normalize_week_days(days: Optional[list[int]]) -> Optional[list[int]]:
    if days is None:
        return None
    return sorted(set(days))


class HabitInput(_StoredModel):
    """
    Fields a caller supplies when creating a habit.

    id, createdAt and completions are generated by the store and are
    ignored if present.
    """

    title: str = Field(
        ...,
        min_length=1,
        description="Display title"
    )
    description: Optional[str] = Field(
        default=None,
        description="Optional free text"
    )
    category_id: str = Field(
        ...,
        min_length=1,
        description="ID of the owning category"
    )
    frequency: Frequency = Field(
        default=Frequency.DAILY,
        description="Scheduling mode"
    )
    week_days: Optional[list[WeekDay]] = Field(
        default=None,
        description="Weekdays (0=Sunday) for weekly habits"
    )

    @field_validator('week_days')
    @classmethod
    def dedupe_week_days(cls, v: Optional[list[int]]) -> Optional[list[int]]:
        return _normalize_week_days(v)

    @model_validator(mode='after')
    def drop_days_for_daily(self):
        """weekDays only mean something for weekly habits."""
        if self.frequency == Frequency.DAILY:
            self.week_days = None
        return self


class Habit(HabitInput):
    """
    A recurring habit with its completion history.

    completions is sparse: a missing date means "not completed".
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique habit ID, immutable"
    )
    completions: dict[str, bool] = Field(
        default_factory=dict,
        description="ISO date -> completed flag"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Creation timestamp, immutable"
    )

    @field_validator('completions')
    @classmethod
    def validate_completion_dates(cls, v: dict[str, bool]) -> dict[str, bool]:
        for key in v:
            parse_iso_date(key)
        return v

    def is_completed_on(self, day: str) -> bool:
        return self.completions.get(day, False)


class HabitUpdate(_StoredModel):
    """
    Partial habit update.

    Only fields explicitly set are merged. id, createdAt and completions are
    not part of this model, so they are dropped if a caller passes them.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category_id: Optional[str] = Field(default=None, min_length=1)
    frequency: Optional[Frequency] = None
    week_days: Optional[list[WeekDay]] = None

    @field_validator('week_days')
    @classmethod
    def dedupe_week_days(cls, v: Optional[list[int]]) -> Optional[list[int]]:
        return _normalize_week_days(v)

    def changes(self) -> dict:
        """
        The explicitly set fields, keyed by Python attribute name.

        None clears description and week_days; for required fields it means
        "leave as is".
        """
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in _CLEARABLE_HABIT_FIELDS
        }


_CLEARABLE_HABIT_FIELDS = frozenset({"description", "week_days"})
