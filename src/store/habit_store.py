"""
Habit Store

The single owner of the habits and categories collections.

Flow for every mutation:
1. Apply a pure transition (src.store.state) to the current snapshot
2. Swap in the new snapshot
3. Run the explicit persist step for the touched collections
4. Log an audit event

DESIGN DECISION: The store never raises storage errors. Load failures fall
back to defaults, write failures are logged and the in-memory state stays
authoritative; the next successful mutation rewrites the full collection.
"""

from datetime import date, datetime
from typing import Callable, Optional, Union
from uuid import uuid4

from src.audit import AuditLogger
from src.models.audit import AuditEventBuilder
from src.models.habit import (
    Category,
    CategoryInput,
    CategoryUpdate,
    Habit,
    HabitInput,
    HabitUpdate,
    default_categories,
    utc_now,
)
from src.services.storage import HabitPersistence, StorageError
from src.store import state as transitions
from src.store.schedule import habits_due_on, to_iso
from src.store.state import HabitState


HABITS = "habits"
CATEGORIES = "categories"


def _new_id() -> str:
    return str(uuid4())


class HabitStore:
    """
    In-memory authoritative state with best-effort local persistence.

    Construct one per application and pass it to whatever renders it.
    Use as a context manager, or call close(), to release the backend.
    """

    def __init__(
        self,
        persistence: HabitPersistence,
        audit_logger: Optional[AuditLogger] = None,
        persist_empty_collections: bool = False,
        clock: Callable[[], datetime] = utc_now,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = _new_id,
    ):
        """
        Initialize the store and load persisted state.

        Args:
            persistence: Adapter for the two stored collections
            audit_logger: Receives mutation and failure events
            persist_empty_collections: Write [] for an emptied collection.
                    When False the last stored value is left in place.
            clock: Source of createdAt timestamps
            today: Source of the local calendar date
            id_factory: Generates habit and category ids
        """
        self._persistence = persistence
        self._audit = audit_logger or AuditLogger()
        self._persist_empty = persist_empty_collections
        self._clock = clock
        self._today = today
        self._new_id = id_factory
        self._closed = False
        self._state = self._load()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _load(self) -> HabitState:
        habits: list[Habit] = []
        categories: list[Category] = default_categories()

        try:
            loaded_habits = self._persistence.load_habits()
            if loaded_habits is not None:
                habits = loaded_habits
        except StorageError as e:
            self._audit.log(AuditEventBuilder.state_load_failed(HABITS, str(e)))

        try:
            loaded_categories = self._persistence.load_categories()
            # An empty list is never written by default; treat it as absent
            if loaded_categories:
                categories = loaded_categories
        except StorageError as e:
            self._audit.log(AuditEventBuilder.state_load_failed(CATEGORIES, str(e)))

        state = HabitState(habits=tuple(habits), categories=tuple(categories))
        state, repaired, missing = transitions.repair_dangling_references(state)
        if repaired:
            self._audit.log(AuditEventBuilder.dangling_category_repaired(
                habit_ids=repaired,
                missing_category_ids=missing,
                fallback_category_id=state.categories[0].id,
            ))

        self._audit.log(AuditEventBuilder.state_loaded(
            habit_count=len(state.habits),
            category_count=len(state.categories),
        ))
        return state

    def close(self) -> None:
        """Release the storage backend. Further mutations are not persisted."""
        if not self._closed:
            self._closed = True
            self._persistence.close()

    def __enter__(self) -> "HabitStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> HabitState:
        """The current immutable snapshot."""
        return self._state

    @property
    def habits(self) -> list[Habit]:
        return list(self._state.habits)

    @property
    def categories(self) -> list[Category]:
        return list(self._state.categories)

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return self._state.find_habit(habit_id)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._state.find_category(category_id)

    def today(self) -> str:
        """Local calendar date as YYYY-MM-DD."""
        return to_iso(self._today())

    def get_habits_for_date(self, day: Union[str, date]) -> list[Habit]:
        """
        Habits due on a date: all daily habits plus weekly habits whose
        weekDays include that weekday. Insertion order; no side effects.
        """
        return habits_due_on(self._state.habits, day)

    def get_todays_habits(self) -> list[Habit]:
        return self.get_habits_for_date(self.today())

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def persist(self, habits: bool = True, categories: bool = True) -> None:
        """
        Write the selected collections in full.

        Empty collections are skipped unless persist_empty_collections is
        set. Failures are logged, never raised.
        """
        if self._closed:
            return
        if habits:
            self._persist_collection(HABITS, list(self._state.habits), self._persistence.save_habits)
        if categories:
            self._persist_collection(
                CATEGORIES, list(self._state.categories), self._persistence.save_categories
            )

    def _persist_collection(self, name: str, items: list, save: Callable[[list], None]) -> None:
        if not items and not self._persist_empty:
            self._audit.log(AuditEventBuilder.persist_skipped_empty(name))
            return
        try:
            save(items)
        except StorageError as e:
            self._audit.log(AuditEventBuilder.persist_failed(name, str(e)))

    # -------------------------------------------------------------------------
    # Habit operations
    # -------------------------------------------------------------------------

    def add_habit(self, habit_input: Union[HabitInput, dict]) -> Habit:
        """
        Create a habit with a fresh id, the current timestamp and no
        completions, append it, and persist.
        """
        if not isinstance(habit_input, HabitInput):
            habit_input = HabitInput.model_validate(habit_input)

        self._state, habit = transitions.add_habit(
            self._state, habit_input, habit_id=self._new_id(), created_at=self._clock()
        )
        self.persist(categories=False)
        self._audit.log(AuditEventBuilder.habit_added(habit.id, habit.title))
        return habit

    def update_habit(self, habit_id: str, updates: Union[HabitUpdate, dict]) -> bool:
        """
        Merge the given fields into a habit. id, createdAt and completions
        are never changed here. Returns False (and changes nothing) if the
        id is unknown.
        """
        if not isinstance(updates, HabitUpdate):
            updates = HabitUpdate.model_validate(updates)

        self._state, found = transitions.update_habit(self._state, habit_id, updates)
        self.persist(categories=False)
        if found:
            self._audit.log(AuditEventBuilder.habit_updated(habit_id, sorted(updates.changes())))
        else:
            self._audit.log(AuditEventBuilder.entity_not_found("habit", habit_id, "update_habit"))
        return found

    def delete_habit(self, habit_id: str) -> bool:
        self._state, found = transitions.delete_habit(self._state, habit_id)
        self.persist(categories=False)
        if found:
            self._audit.log(AuditEventBuilder.habit_deleted(habit_id))
        else:
            self._audit.log(AuditEventBuilder.entity_not_found("habit", habit_id, "delete_habit"))
        return found

    def toggle_habit_completion(self, habit_id: str, day: Union[str, date]) -> Optional[bool]:
        """
        Flip the completion flag for a date (first toggle marks it done).

        Returns the new flag, or None if the habit is unknown.
        """
        if isinstance(day, date):
            day = to_iso(day)

        self._state, flag = transitions.toggle_completion(self._state, habit_id, day)
        self.persist(categories=False)
        if flag is None:
            self._audit.log(
                AuditEventBuilder.entity_not_found("habit", habit_id, "toggle_habit_completion")
            )
        else:
            self._audit.log(AuditEventBuilder.completion_toggled(habit_id, day, flag))
        return flag

    # -------------------------------------------------------------------------
    # Category operations
    # -------------------------------------------------------------------------

    def add_category(self, category_input: Union[CategoryInput, dict]) -> str:
        """Create a category and return its id."""
        if not isinstance(category_input, CategoryInput):
            category_input = CategoryInput.model_validate(category_input)

        self._state, category = transitions.add_category(
            self._state, category_input, category_id=self._new_id()
        )
        self.persist(habits=False)
        self._audit.log(AuditEventBuilder.category_added(category.id, category.name))
        return category.id

    def update_category(self, category_id: str, updates: Union[CategoryUpdate, dict]) -> bool:
        if not isinstance(updates, CategoryUpdate):
            updates = CategoryUpdate.model_validate(updates)

        self._state, found = transitions.update_category(self._state, category_id, updates)
        self.persist(habits=False)
        if found:
            fields = sorted(updates.model_dump(exclude_unset=True))
            self._audit.log(AuditEventBuilder.category_updated(category_id, fields))
        else:
            self._audit.log(
                AuditEventBuilder.entity_not_found("category", category_id, "update_category")
            )
        return found

    def delete_category(self, category_id: str) -> bool:
        """
        Move the category's habits to the first other category, then delete
        it. Deleting the last remaining category is refused.

        Returns True if the category was removed.
        """
        result = transitions.delete_category(self._state, category_id)
        self._state = result.state
        self.persist()

        if result.deleted:
            self._audit.log(AuditEventBuilder.category_deleted(
                category_id,
                fallback_category_id=result.fallback_category_id,
                reassigned_habit_ids=list(result.reassigned_habit_ids),
            ))
        elif result.refused_reason:
            self._audit.log(
                AuditEventBuilder.category_delete_refused(category_id, result.refused_reason)
            )
        else:
            self._audit.log(
                AuditEventBuilder.entity_not_found("category", category_id, "delete_category")
            )
        return result.deleted
