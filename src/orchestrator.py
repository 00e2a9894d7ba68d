"""
Main Orchestrator for the Habit Tracker

This module ties together all the components and defines the flows the
presentation layer calls:
1. Habit form (validate -> add or update)
2. Toggle completion
3. Delete habit
4. Add category

DESIGN DECISION: The presentation layer never builds storage or the store
itself. create_app_components() reads the settings once and returns an
explicitly owned store plus the flows bound to it.
"""

from datetime import date
from typing import Optional, Union

from src.audit import AuditLogger, configure_logging
from src.config import Settings, StorageSettings, get_settings
from src.models.form import HabitFormData, ValidationIssue, ValidationResult
from src.models.habit import CategoryInput, HabitUpdate
from src.queries import DashboardQuery
from src.services.storage import (
    HabitPersistence,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    SqliteStorage,
)
from src.store import HabitStore
from src.validation import HabitFormValidator


class HabitFormFlow:
    """
    Orchestrates the habit form and the card actions.

    Every method returns a user-facing message alongside its result, so the
    UI only has to display it.
    """

    def __init__(
        self,
        store: HabitStore,
        validator: Optional[HabitFormValidator] = None,
    ):
        self._store = store
        self._validator = validator or HabitFormValidator(store)

    def submit(
        self,
        form: HabitFormData,
        editing_id: Optional[str] = None,
    ) -> tuple[ValidationResult, Optional[str], str]:
        """
        Validate the form, then add a habit or update ``editing_id``.

        Returns:
            (validation_result, habit_id, message)

        habit_id is None when validation failed or the edited habit no
        longer exists. Nothing is saved when there are errors.
        """
        result = self._validator.validate(form)
        if not result.is_valid:
            return result, None, self._validator.get_user_friendly_summary(result)

        habit_input = self._validator.to_habit_input(form)

        if editing_id is None:
            habit = self._store.add_habit(habit_input)
            return result, habit.id, f'"{habit.title}" has been added to your habits.'

        updates = HabitUpdate(**habit_input.model_dump())
        if not self._store.update_habit(editing_id, updates):
            return result, None, "That habit no longer exists."
        return result, editing_id, "Your habit has been successfully updated."

    def toggle(self, habit_id: str, day: Union[str, date, None] = None) -> tuple[bool, str]:
        """
        Toggle completion for ``day`` (default: today).

        Returns:
            (completed_now, message). The message is empty unless the habit
            was just completed.
        """
        day = day or self._store.today()
        habit = self._store.get_habit(habit_id)
        flag = self._store.toggle_habit_completion(habit_id, day)
        if flag and habit is not None:
            return True, f'Great job! You completed "{habit.title}"!'
        return bool(flag), ""

    def delete(self, habit_id: str) -> str:
        habit = self._store.get_habit(habit_id)
        if habit is None or not self._store.delete_habit(habit_id):
            return "That habit no longer exists."
        return f'"{habit.title}" has been removed from your habits.'

    def add_category(self, name: str, color: str) -> tuple[ValidationResult, Optional[str]]:
        """Add a category after checking the name. Returns (result, new_id)."""
        name = name.strip()
        if not name:
            issue = ValidationIssue(
                field="name",
                issue_type="missing",
                message="Please give the category a name",
                severity="error",
            )
            return ValidationResult(is_valid=False, issues=[issue]), None

        category_id = self._store.add_category(CategoryInput(name=name, color=color))
        return ValidationResult(is_valid=True), category_id


def create_storage(storage_settings: StorageSettings) -> KeyValueStorageInterface:
    """Build the configured key-value backend."""
    if storage_settings.backend == "memory":
        return InMemoryStorage()
    if storage_settings.backend == "sqlite":
        return SqliteStorage(storage_settings.sqlite_path)
    return JsonFileStorage(storage_settings.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[HabitStore, HabitFormFlow, DashboardQuery]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use; defaults to get_settings()
        storage: Backend override (tests pass InMemoryStorage)

    Returns:
        (store, habit_form_flow, dashboard_query)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    configure_logging(settings.app.effective_log_level)

    persistence = HabitPersistence(
        storage or create_storage(storage_settings),
        habits_key=storage_settings.habits_key,
        categories_key=storage_settings.categories_key,
    )
    store = HabitStore(
        persistence,
        audit_logger=AuditLogger(),
        persist_empty_collections=storage_settings.persist_empty_collections,
    )
    return store, HabitFormFlow(store), DashboardQuery(store)
