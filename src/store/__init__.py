"""Habit store package: pure transitions, schedule logic and the owning store."""

from src.store.habit_store import HabitStore
from src.store.schedule import day_of_week, format_long_date, habits_due_on, is_due
from src.store.state import CategoryDeletion, HabitState

__all__ = [
    "CategoryDeletion",
    "HabitState",
    "HabitStore",
    "day_of_week",
    "format_long_date",
    "habits_due_on",
    "is_due",
]
