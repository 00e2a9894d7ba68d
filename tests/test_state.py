"""Tests for the pure state transitions. No storage involved."""

import pytest
from datetime import datetime, timezone

from src.models.habit import (
    Category,
    CategoryInput,
    CategoryUpdate,
    Habit,
    HabitInput,
    HabitUpdate,
)
from src.store import state as transitions
from src.store.state import HabitState


NOW = datetime(2024, 1, 2, 8, 30, tzinfo=timezone.utc)


def _state_with_habits(*specs) -> HabitState:
    """specs: (habit_id, category_id) pairs."""
    state = HabitState.initial()
    for habit_id, category_id in specs:
        state, _ = transitions.add_habit(
            state,
            HabitInput(title=habit_id, category_id=category_id),
            habit_id=habit_id,
            created_at=NOW,
        )
    return state


class TestHabitTransitions:

    def test_initial_state(self):
        state = HabitState.initial()
        assert state.habits == ()
        assert [c.id for c in state.categories] == ["1", "2", "3", "4"]

    def test_add_habit_appends_with_generated_fields(self):
        state = _state_with_habits(("a", "1"))
        state, habit = transitions.add_habit(
            state, HabitInput(title="Drink water", category_id="1"), habit_id="b", created_at=NOW
        )
        assert [h.id for h in state.habits] == ["a", "b"]
        assert habit.completions == {}
        assert habit.created_at == NOW

    def test_transitions_do_not_mutate_previous_state(self):
        before = _state_with_habits(("a", "1"))
        after, _ = transitions.toggle_completion(before, "a", "2024-01-01")
        assert before.habits[0].completions == {}
        assert after.habits[0].completions == {"2024-01-01": True}

    def test_update_merges_only_given_fields(self):
        state = _state_with_habits(("a", "1"))
        state, found = transitions.update_habit(state, "a", HabitUpdate(title="Renamed"))
        habit = state.habits[0]
        assert found is True
        assert habit.title == "Renamed"
        assert habit.category_id == "1"
        assert habit.created_at == NOW

    def test_update_to_daily_drops_week_days(self):
        state = HabitState.initial()
        state, _ = transitions.add_habit(
            state,
            HabitInput(title="Gym", category_id="1", frequency="weekly", week_days=[1, 3]),
            habit_id="g",
            created_at=NOW,
        )
        state, _ = transitions.update_habit(state, "g", HabitUpdate(frequency="daily"))
        assert state.habits[0].week_days is None

    def test_update_keeps_completions(self):
        state = _state_with_habits(("a", "1"))
        state, _ = transitions.toggle_completion(state, "a", "2024-01-01")
        state, _ = transitions.update_habit(state, "a", HabitUpdate(title="Renamed"))
        assert state.habits[0].completions == {"2024-01-01": True}

    def test_update_unknown_id_is_noop(self):
        state = _state_with_habits(("a", "1"))
        new_state, found = transitions.update_habit(state, "missing", HabitUpdate(title="x"))
        assert found is False
        assert new_state is state

    def test_delete_removes_exactly_one(self):
        state = _state_with_habits(("a", "1"), ("b", "1"), ("c", "2"))
        state, _ = transitions.toggle_completion(state, "c", "2024-01-01")
        state, found = transitions.delete_habit(state, "b")
        assert found is True
        assert [h.id for h in state.habits] == ["a", "c"]
        assert state.habits[1].completions == {"2024-01-01": True}

    def test_delete_unknown_id(self):
        state = _state_with_habits(("a", "1"))
        state, found = transitions.delete_habit(state, "zzz")
        assert found is False
        assert len(state.habits) == 1

    def test_toggle_is_an_involution(self):
        state = _state_with_habits(("a", "1"))
        state, first = transitions.toggle_completion(state, "a", "2024-01-01")
        state, second = transitions.toggle_completion(state, "a", "2024-01-01")
        assert first is True
        assert second is False
        assert state.habits[0].completions == {"2024-01-01": False}

    def test_toggle_unknown_habit(self):
        state = _state_with_habits(("a", "1"))
        new_state, flag = transitions.toggle_completion(state, "missing", "2024-01-01")
        assert flag is None
        assert new_state is state

    def test_toggle_rejects_bad_date(self):
        state = _state_with_habits(("a", "1"))
        with pytest.raises(ValueError):
            transitions.toggle_completion(state, "a", "yesterday")


class TestCategoryTransitions:

    def test_add_category(self):
        state, category = transitions.add_category(
            HabitState.initial(), CategoryInput(name="Fitness", color="#111111"), category_id="c5"
        )
        assert state.categories[-1] == category
        assert category.id == "c5"

    def test_update_category(self):
        state, found = transitions.update_category(
            HabitState.initial(), "2", CategoryUpdate(name="Work")
        )
        assert found is True
        assert state.find_category("2").name == "Work"
        assert state.find_category("2").color == "#3b82f6"

    def test_delete_reassigns_to_first_category(self):
        """Test habits move to the first remaining category before removal."""
        state = _state_with_habits(("a", "3"), ("b", "2"), ("c", "3"))
        result = transitions.delete_category(state, "3")
        assert result.deleted is True
        assert result.fallback_category_id == "1"
        assert result.reassigned_habit_ids == ("a", "c")
        assert [h.category_id for h in result.state.habits] == ["1", "2", "1"]
        assert result.state.find_category("3") is None

    def test_delete_first_category_uses_next_one(self):
        state = _state_with_habits(("a", "1"))
        result = transitions.delete_category(state, "1")
        assert result.fallback_category_id == "2"
        assert result.state.habits[0].category_id == "2"

    def test_delete_last_category_refused(self):
        state = HabitState(
            habits=(Habit(id="a", title="a", category_id="only"),),
            categories=(Category(id="only", name="Only", color="#000"),),
        )
        result = transitions.delete_category(state, "only")
        assert result.deleted is False
        assert result.refused_reason is not None
        assert result.state is state

    def test_delete_unknown_category(self):
        state = HabitState.initial()
        result = transitions.delete_category(state, "nope")
        assert result.deleted is False
        assert result.refused_reason is None
        assert len(result.state.categories) == 4

    def test_every_habit_keeps_a_valid_category(self):
        state = _state_with_habits(("a", "1"), ("b", "2"), ("c", "3"), ("d", "4"))
        for category_id in ["1", "2", "3", "4"]:
            state = transitions.delete_category(state, category_id).state
        known = state.category_ids()
        assert len(known) == 1
        assert all(h.category_id in known for h in state.habits)


class TestRepairDanglingReferences:

    def test_repairs_unknown_categories(self):
        state = HabitState(
            habits=(
                Habit(id="a", title="a", category_id="gone"),
                Habit(id="b", title="b", category_id="2"),
            ),
            categories=HabitState.initial().categories,
        )
        state, repaired, missing = transitions.repair_dangling_references(state)
        assert repaired == ["a"]
        assert missing == ["gone"]
        assert [h.category_id for h in state.habits] == ["1", "2"]

    def test_nothing_to_repair(self):
        state = _state_with_habits(("a", "1"))
        new_state, repaired, _ = transitions.repair_dangling_references(state)
        assert repaired == []
        assert new_state is state
