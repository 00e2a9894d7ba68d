"""Tests for day-of-week and due-date logic."""

import pytest
from datetime import date

from src.models.habit import Habit
from src.store.schedule import day_of_week, format_long_date, habits_due_on, is_due


# 2024-01-07 is a Sunday, 2024-01-01 a Monday
WEEK = {
    "2024-01-07": 0,
    "2024-01-01": 1,
    "2024-01-02": 2,
    "2024-01-03": 3,
    "2024-01-04": 4,
    "2024-01-05": 5,
    "2024-01-06": 6,
}


def _habit(habit_id: str, frequency: str = "daily", week_days=None) -> Habit:
    return Habit(
        id=habit_id,
        title=habit_id,
        category_id="1",
        frequency=frequency,
        week_days=week_days,
    )


class TestDayOfWeek:

    @pytest.mark.parametrize("day,expected", sorted(WEEK.items()))
    def test_sunday_is_zero(self, day, expected):
        assert day_of_week(day) == expected

    def test_accepts_date_objects(self):
        assert day_of_week(date(2026, 10, 17)) == 6

    def test_rejects_malformed_dates(self):
        with pytest.raises(ValueError):
            day_of_week("2024-13-01")


class TestIsDue:

    def test_daily_always_due(self):
        habit = _habit("water")
        assert all(is_due(habit, weekday) for weekday in range(7))

    def test_weekly_mon_wed_fri(self):
        """Test a Mon/Wed/Fri habit is due on exactly those days."""
        gym = _habit("gym", "weekly", [1, 3, 5])
        for day, weekday in WEEK.items():
            due = habits_due_on([gym], day) == [gym]
            assert due is (weekday in (1, 3, 5)), day

    def test_weekly_without_days_never_due(self):
        assert not any(is_due(_habit("x", "weekly", None), wd) for wd in range(7))
        assert not any(is_due(_habit("y", "weekly", []), wd) for wd in range(7))


class TestHabitsDueOn:

    def test_preserves_insertion_order(self):
        habits = [
            _habit("a"),
            _habit("b", "weekly", [2]),
            _habit("c", "weekly", [4]),
            _habit("d"),
        ]
        due = habits_due_on(habits, "2024-01-02")
        assert [h.id for h in due] == ["a", "b", "d"]

    def test_repeated_calls_are_identical(self):
        habits = [_habit("a"), _habit("b", "weekly", [1])]
        assert habits_due_on(habits, "2024-01-01") == habits_due_on(habits, "2024-01-01")


class TestFormatLongDate:

    def test_format(self):
        assert format_long_date("2024-01-02") == "Tuesday, January 2, 2024"

    def test_format_date_object(self):
        assert format_long_date(date(2026, 10, 17)) == "Saturday, October 17, 2026"
