"""Query package."""

from src.queries.dashboard import DashboardQuery, completion_rate

__all__ = ["DashboardQuery", "completion_rate"]
