"""
Habit Persistence Adapter

Encodes the habits and categories collections as JSON arrays and stores them
under two independent keys of a key-value backend.

The adapter raises; it never decides on fallbacks. The store catches
StorageError and applies its own defaults.
"""

import json
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from src.models.habit import Category, Habit
from src.services.storage.interface import (
    CorruptDataError,
    KeyValueStorageInterface,
)


_HABITS = TypeAdapter(list[Habit])
_CATEGORIES = TypeAdapter(list[Category])


class HabitPersistence:
    """
    Typed read/write of the two collections.

    Layout (both entries are JSON arrays of camelCase objects):
        <habits_key>      -> [Habit, ...]
        <categories_key>  -> [Category, ...]
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        habits_key: str = "habit-tracker-habits",
        categories_key: str = "habit-tracker-categories",
    ):
        self._storage = storage
        self.habits_key = habits_key
        self.categories_key = categories_key

    @property
    def storage(self) -> KeyValueStorageInterface:
        return self._storage

    def load_habits(self) -> Optional[list[Habit]]:
        """
        Read the habits collection.

        Returns:
            The habits, or None if nothing is stored

        Raises:
            CorruptDataError: If the stored value is not a valid habit list
            StorageError: If the backend read fails
        """
        raw = self._storage.get_item(self.habits_key)
        if raw is None:
            return None
        try:
            return _HABITS.validate_json(raw)
        except ValidationError as e:
            raise CorruptDataError(f"Stored habits are invalid: {e}")

    def load_categories(self) -> Optional[list[Category]]:
        """Read the categories collection. Same contract as load_habits."""
        raw = self._storage.get_item(self.categories_key)
        if raw is None:
            return None
        try:
            return _CATEGORIES.validate_json(raw)
        except ValidationError as e:
            raise CorruptDataError(f"Stored categories are invalid: {e}")

    def save_habits(self, habits: list[Habit]) -> None:
        self._storage.set_item(
            self.habits_key,
            json.dumps([habit.to_storage_dict() for habit in habits]),
        )

    def save_categories(self, categories: list[Category]) -> None:
        self._storage.set_item(
            self.categories_key,
            json.dumps([category.to_storage_dict() for category in categories]),
        )

    def close(self) -> None:
        self._storage.close()
