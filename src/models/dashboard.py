"""
Dashboard models.

The read-only view the presentation layer renders for one calendar day.
"""

from pydantic import BaseModel, Field

from src.models.habit import Category, Habit


class DashboardEntry(BaseModel):
    """One habit due on the day, joined with its category."""

    habit: Habit
    category: Category
    completed: bool


class DailyDashboard(BaseModel):
    """
    Habits due on a day and how many are done.

    completion_rate is an integer percentage; 0 when nothing is due.
    """

    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    display_date: str = Field(..., description="e.g. 'Saturday, October 17, 2026'")
    entries: list[DashboardEntry] = Field(default_factory=list)
    total: int = Field(ge=0)
    completed_count: int = Field(ge=0)
    completion_rate: int = Field(ge=0, le=100)

    @property
    def is_perfect_day(self) -> bool:
        """Habits are due and every one of them is done."""
        return self.total > 0 and self.completed_count == self.total

    @property
    def is_empty(self) -> bool:
        return self.total == 0
