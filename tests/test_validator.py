"""Tests for the habit form validator."""

import pytest

from src.models.form import HabitFormData
from src.models.habit import Frequency
from src.validation import HabitFormValidator


@pytest.fixture
def validator(store):
    return HabitFormValidator(store)


class TestHabitFormValidator:

    def test_valid_daily_form(self, validator):
        result = validator.validate(HabitFormData(title="Drink water", category_id="1"))
        assert result.is_valid is True
        assert result.issues == []

    def test_blank_title_rejected(self, validator):
        result = validator.validate(HabitFormData(title="   ", category_id="1"))
        assert result.is_valid is False
        assert [i.field for i in result.issues] == ["title"]

    def test_missing_category_rejected(self, validator):
        result = validator.validate(HabitFormData(title="Read"))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "missing"

    def test_unknown_category_rejected(self, validator):
        result = validator.validate(HabitFormData(title="Read", category_id="deleted"))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "unknown_reference"

    def test_weekly_without_days_is_a_warning(self, validator):
        result = validator.validate(
            HabitFormData(title="Gym", category_id="1", frequency=Frequency.WEEKLY)
        )
        assert result.is_valid is True
        assert [w.field for w in result.warnings] == ["week_days"]

    def test_weekly_day_out_of_range(self, validator):
        result = validator.validate(HabitFormData(
            title="Gym", category_id="1", frequency=Frequency.WEEKLY, week_days=[1, 9],
        ))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "out_of_range"

    def test_to_habit_input_normalizes(self, validator):
        habit_input = validator.to_habit_input(HabitFormData(
            title="  Gym  ",
            description="   ",
            category_id="1",
            frequency=Frequency.WEEKLY,
            week_days=[5, 1, 5],
        ))
        assert habit_input.title == "Gym"
        assert habit_input.description is None
        assert habit_input.week_days == [1, 5]

    def test_to_habit_input_drops_days_for_daily(self, validator):
        habit_input = validator.to_habit_input(
            HabitFormData(title="Water", category_id="1", week_days=[2])
        )
        assert habit_input.week_days is None

    def test_summary_lists_errors_first(self, validator):
        result = validator.validate(HabitFormData(
            title="", category_id="1", frequency=Frequency.WEEKLY,
        ))
        summary = validator.get_user_friendly_summary(result)
        lines = summary.splitlines()
        assert "title" in lines[0]
        assert "never be due" in lines[1]
