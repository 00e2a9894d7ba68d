"""
Habit Form Validation

The store performs no user-facing validation; this module is what the
presentation layer runs before calling add_habit or update_habit.

Checks:
- Title present after trimming
- Category chosen and still existing
- Weekly habits have at least one day (warning only: such a habit is
  allowed but never due)
- Days within 0-6

IMPORTANT: Validation never silently fixes issues. It reports them, and
to_habit_input() is only called once there are no errors.
"""

from src.models.form import HabitFormData, ValidationIssue, ValidationResult
from src.models.habit import Frequency, HabitInput
from src.store import HabitStore


class HabitFormValidator:
    """Validates habit form submissions against the current categories."""

    def __init__(self, store: HabitStore):
        self._store = store

    def validate(self, form: HabitFormData) -> ValidationResult:
        issues: list[ValidationIssue] = []

        if not form.title.strip():
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Please give your habit a title",
                severity="error",
            ))

        if not form.category_id:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="missing",
                message="Please choose a category",
                severity="error",
            ))
        elif self._store.get_category(form.category_id) is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_reference",
                message="The selected category no longer exists",
                severity="error",
                suggested_fix="Pick another category",
            ))

        if form.frequency == Frequency.WEEKLY:
            out_of_range = sorted({d for d in form.week_days if not 0 <= d <= 6})
            if out_of_range:
                issues.append(ValidationIssue(
                    field="week_days",
                    issue_type="out_of_range",
                    message=f"Invalid weekdays: {out_of_range}",
                    severity="error",
                ))
            elif not form.week_days:
                issues.append(ValidationIssue(
                    field="week_days",
                    issue_type="missing",
                    message="No days selected, this habit will never be due",
                    severity="warning",
                    suggested_fix="Select at least one day",
                ))

        has_errors = any(issue.severity == "error" for issue in issues)
        return ValidationResult(is_valid=not has_errors, issues=issues)

    @staticmethod
    def to_habit_input(form: HabitFormData) -> HabitInput:
        """
        Normalized store input: trimmed title, empty description dropped,
        days kept only for weekly habits.
        """
        weekly = form.frequency == Frequency.WEEKLY
        return HabitInput(
            title=form.title.strip(),
            description=form.description.strip() or None,
            category_id=form.category_id,
            frequency=form.frequency,
            week_days=sorted(set(form.week_days)) if weekly else None,
        )

    @staticmethod
    def get_user_friendly_summary(result: ValidationResult) -> str:
        """One line per issue, errors first."""
        if not result.issues:
            return "Looks good!"
        ordered = sorted(result.issues, key=lambda i: i.severity != "error")
        return "\n".join(
            f"{'❌' if issue.severity == 'error' else '⚠️'} {issue.message}"
            for issue in ordered
        )
