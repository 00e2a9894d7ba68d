"""Tests for the daily dashboard query."""

import pytest
from datetime import date

from src.queries import DashboardQuery, completion_rate


class TestCompletionRate:

    @pytest.mark.parametrize("completed,total,expected", [
        (0, 0, 0),
        (0, 3, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 2, 50),
        (1, 8, 13),
        (3, 3, 100),
    ])
    def test_rounded_percentage(self, completed, total, expected):
        assert completion_rate(completed, total) == expected


class TestDashboardQuery:

    def test_empty_day(self, store):
        dashboard = DashboardQuery(store).build()
        assert dashboard.date == "2024-01-02"
        assert dashboard.display_date == "Tuesday, January 2, 2024"
        assert dashboard.is_empty is True
        assert dashboard.completion_rate == 0
        assert dashboard.is_perfect_day is False

    def test_counts_completed_due_habits(self, store):
        water = store.add_habit({"title": "Water", "category_id": "1"})
        store.add_habit({"title": "Read", "category_id": "3"})
        store.add_habit({"title": "Gym", "category_id": "1", "frequency": "weekly", "week_days": [1]})
        store.toggle_habit_completion(water.id, "2024-01-02")

        dashboard = DashboardQuery(store).build()
        assert [e.habit.title for e in dashboard.entries] == ["Water", "Read"]
        assert dashboard.entries[0].completed is True
        assert dashboard.entries[0].category.name == "Health"
        assert dashboard.total == 2
        assert dashboard.completed_count == 1
        assert dashboard.completion_rate == 50

    def test_perfect_day(self, store):
        water = store.add_habit({"title": "Water", "category_id": "1"})
        store.toggle_habit_completion(water.id, "2024-01-02")
        assert DashboardQuery(store).build().is_perfect_day is True

    def test_other_dates(self, store):
        store.add_habit({"title": "Gym", "category_id": "1", "frequency": "weekly", "week_days": [1]})
        assert DashboardQuery(store).build(date(2024, 1, 1)).total == 1
        assert DashboardQuery(store).build("2024-01-02").total == 0

    def test_completion_on_another_day_does_not_count(self, store):
        water = store.add_habit({"title": "Water", "category_id": "1"})
        store.toggle_habit_completion(water.id, "2024-01-01")
        assert DashboardQuery(store).build().completed_count == 0

    def test_habit_with_unknown_category_skipped(self, store):
        store.add_habit({"title": "Orphan", "category_id": "nope"})
        store.add_habit({"title": "Water", "category_id": "1"})
        dashboard = DashboardQuery(store).build()
        assert [e.habit.title for e in dashboard.entries] == ["Water"]
