"""
Daily Dashboard Query

DESIGN DECISION: The dashboard is computed from the store on every call.
It is a pure read: the same date and the same store state always give the
same dashboard.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from src.models.dashboard import DailyDashboard, DashboardEntry
from src.store import HabitStore, format_long_date
from src.store.schedule import to_iso


def completion_rate(completed: int, total: int) -> int:
    """Integer percentage, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    rate = Decimal(completed * 100) / Decimal(total)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class DashboardQuery:
    """Builds the dashboard for one calendar day."""

    def __init__(self, store: HabitStore):
        self._store = store

    def build(self, for_date: Optional[Union[str, date]] = None) -> DailyDashboard:
        """
        Habits due on ``for_date`` (default: today) with their category and
        completion flag.

        Habits whose category cannot be found are left out.
        """
        if for_date is None:
            day = self._store.today()
        elif isinstance(for_date, date):
            day = to_iso(for_date)
        else:
            day = for_date

        entries = []
        for habit in self._store.get_habits_for_date(day):
            category = self._store.get_category(habit.category_id)
            if category is None:
                continue
            entries.append(DashboardEntry(
                habit=habit,
                category=category,
                completed=habit.is_completed_on(day),
            ))

        completed_count = sum(1 for entry in entries if entry.completed)
        return DailyDashboard(
            date=day,
            display_date=format_long_date(day),
            entries=entries,
            total=len(entries),
            completed_count=completed_count,
            completion_rate=completion_rate(completed_count, len(entries)),
        )
