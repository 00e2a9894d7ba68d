"""Form validation package."""

from src.validation.validator import HabitFormValidator

__all__ = ["HabitFormValidator"]
