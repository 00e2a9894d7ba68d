"""
Schedule logic: which habits are due on a calendar date.

Weekdays use 0=Sunday .. 6=Saturday, the same numbering stored in
Habit.week_days. Dates are calendar dates, so no timezone is involved once
the caller has picked "today".
"""

from datetime import date
from typing import Iterable, Union

from src.models.habit import Frequency, Habit, parse_iso_date


def to_iso(day: date) -> str:
    return day.isoformat()


def day_of_week(day: Union[str, date]) -> int:
    """
    Weekday index with Sunday as 0.

    >>> day_of_week("2024-01-01")  # a Monday
    1
    """
    if isinstance(day, str):
        day = parse_iso_date(day)
    return day.isoweekday() % 7


def is_due(habit: Habit, weekday: int) -> bool:
    """Daily habits are always due; weekly ones only on their listed days."""
    if habit.frequency == Frequency.DAILY:
        return True
    if habit.frequency == Frequency.WEEKLY:
        return weekday in (habit.week_days or ())
    return False


def habits_due_on(habits: Iterable[Habit], day: Union[str, date]) -> list[Habit]:
    """Habits due on ``day``, in their original order."""
    weekday = day_of_week(day)
    return [habit for habit in habits if is_due(habit, weekday)]


def format_long_date(day: Union[str, date]) -> str:
    """'Saturday, October 17, 2026'."""
    if isinstance(day, str):
        day = parse_iso_date(day)
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"
