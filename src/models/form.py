"""
Form and validation models.

HabitFormData is what the presentation layer collects: raw, untrimmed,
possibly incomplete. It only becomes a HabitInput after validation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.models.habit import Frequency


class HabitFormData(BaseModel):
    """Raw habit form input."""

    title: str = ""
    description: str = ""
    category_id: Optional[str] = None
    frequency: Frequency = Frequency.DAILY
    week_days: list[int] = Field(default_factory=list)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'unknown_reference', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """Result of validating one form submission."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
