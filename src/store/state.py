"""
Pure state transitions for habits and categories.

DESIGN DECISION: Every mutation is a function from an old HabitState to a
new one. Nothing here reads the clock, generates ids or touches storage;
the caller supplies ids and timestamps and decides when to persist.
This keeps the rules (merge semantics, fallback category, toggle) testable
without any I/O.

HabitState is frozen and transitions never mutate a Habit or Category in
place, so a previously returned state is never changed behind its owner.
"""

from datetime import datetime
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict

from src.models.habit import (
    Category,
    CategoryInput,
    CategoryUpdate,
    Habit,
    HabitInput,
    HabitUpdate,
    default_categories,
    parse_iso_date,
)


class HabitState(BaseModel):
    """Snapshot of both collections, in insertion order."""

    model_config = ConfigDict(frozen=True)

    habits: tuple[Habit, ...] = ()
    categories: tuple[Category, ...] = ()

    @classmethod
    def initial(cls) -> "HabitState":
        """No habits, seed categories."""
        return cls(habits=(), categories=tuple(default_categories()))

    def find_habit(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self.habits if h.id == habit_id), None)

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def category_ids(self) -> set[str]:
        return {c.id for c in self.categories}


class CategoryDeletion(NamedTuple):
    """Outcome of delete_category."""

    state: HabitState
    deleted: bool
    fallback_category_id: Optional[str] = None
    reassigned_habit_ids: tuple[str, ...] = ()
    refused_reason: Optional[str] = None


# =============================================================================
# HABITS
# =============================================================================

def add_habit(
    state: HabitState,
    habit_input: HabitInput,
    habit_id: str,
    created_at: datetime,
) -> tuple[HabitState, Habit]:
    """Append a new habit with empty completions."""
    habit = Habit(
        **habit_input.model_dump(),
        id=habit_id,
        created_at=created_at,
        completions={},
    )
    return state.model_copy(update={"habits": state.habits + (habit,)}), habit


def _merge_habit(habit: Habit, changes: dict) -> Habit:
    # Re-validate so frequency/weekDays normalization runs on the merged result
    return Habit.model_validate({**habit.model_dump(), **changes})


def update_habit(
    state: HabitState,
    habit_id: str,
    update: HabitUpdate,
) -> tuple[HabitState, bool]:
    """
    Merge the explicitly set fields of ``update`` into the habit.

    Returns (new_state, found). An unknown id returns the state unchanged.
    """
    if state.find_habit(habit_id) is None:
        return state, False

    changes = update.changes()
    habits = tuple(
        _merge_habit(h, changes) if h.id == habit_id else h
        for h in state.habits
    )
    return state.model_copy(update={"habits": habits}), True


def delete_habit(state: HabitState, habit_id: str) -> tuple[HabitState, bool]:
    """Remove the habit with this id. Returns (new_state, found)."""
    habits = tuple(h for h in state.habits if h.id != habit_id)
    found = len(habits) != len(state.habits)
    return state.model_copy(update={"habits": habits}), found


def toggle_completion(
    state: HabitState,
    habit_id: str,
    day: str,
) -> tuple[HabitState, Optional[bool]]:
    """
    Flip completions[day]; a missing entry counts as False.

    Returns (new_state, new_flag), new_flag is None if the habit is unknown.

    Raises:
        ValueError: If day is not a YYYY-MM-DD string
    """
    parse_iso_date(day)
    habit = state.find_habit(habit_id)
    if habit is None:
        return state, None

    flag = not habit.completions.get(day, False)
    toggled = habit.model_copy(update={"completions": {**habit.completions, day: flag}})
    habits = tuple(toggled if h.id == habit_id else h for h in state.habits)
    return state.model_copy(update={"habits": habits}), flag


# =============================================================================
# CATEGORIES
# =============================================================================

def add_category(
    state: HabitState,
    category_input: CategoryInput,
    category_id: str,
) -> tuple[HabitState, Category]:
    category = Category(**category_input.model_dump(), id=category_id)
    return state.model_copy(update={"categories": state.categories + (category,)}), category


def update_category(
    state: HabitState,
    category_id: str,
    update: CategoryUpdate,
) -> tuple[HabitState, bool]:
    """Merge name/color. Returns (new_state, found)."""
    if state.find_category(category_id) is None:
        return state, False

    changes = {k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None}
    categories = tuple(
        c.model_copy(update=changes) if c.id == category_id else c
        for c in state.categories
    )
    return state.model_copy(update={"categories": categories}), True


def fallback_category_id(state: HabitState, excluding: str) -> Optional[str]:
    """First category in collection order that is not ``excluding``."""
    return next((c.id for c in state.categories if c.id != excluding), None)


def delete_category(state: HabitState, category_id: str) -> CategoryDeletion:
    """
    Reassign the category's habits to the fallback category, then remove it.

    The only remaining category is never deleted, so every habit keeps a
    valid categoryId.
    """
    if state.find_category(category_id) is None:
        return CategoryDeletion(state=state, deleted=False)

    fallback = fallback_category_id(state, excluding=category_id)
    if fallback is None:
        return CategoryDeletion(
            state=state,
            deleted=False,
            refused_reason="the last remaining category cannot be deleted",
        )

    reassigned = tuple(h.id for h in state.habits if h.category_id == category_id)
    habits = tuple(
        h.model_copy(update={"category_id": fallback}) if h.category_id == category_id else h
        for h in state.habits
    )
    categories = tuple(c for c in state.categories if c.id != category_id)
    return CategoryDeletion(
        state=state.model_copy(update={"habits": habits, "categories": categories}),
        deleted=True,
        fallback_category_id=fallback,
        reassigned_habit_ids=reassigned,
    )


def repair_dangling_references(state: HabitState) -> tuple[HabitState, list[str], list[str]]:
    """
    Point habits with an unknown categoryId at the first category.

    Returns (new_state, repaired_habit_ids, missing_category_ids).
    Nothing changes when there are no categories at all.
    """
    known = state.category_ids()
    dangling = [h for h in state.habits if h.category_id not in known]
    if not dangling or not state.categories:
        return state, [], []

    fallback = state.categories[0].id
    habits = tuple(
        h.model_copy(update={"category_id": fallback}) if h.category_id not in known else h
        for h in state.habits
    )
    missing = sorted({h.category_id for h in dangling})
    return state.model_copy(update={"habits": habits}), [h.id for h in dangling], missing
