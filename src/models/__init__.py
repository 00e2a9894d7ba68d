"""
Data Models Package

This package contains all Pydantic models used in the habit tracker.
All data flowing through the store must conform to these schemas.
"""

from src.models.habit import (
    WEEK_DAYS,
    Category,
    CategoryInput,
    CategoryUpdate,
    Frequency,
    Habit,
    HabitInput,
    HabitUpdate,
    default_categories,
    parse_iso_date,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from src.models.dashboard import DailyDashboard, DashboardEntry
from src.models.form import HabitFormData, ValidationIssue, ValidationResult

__all__ = [
    # Habit models
    "WEEK_DAYS",
    "Category",
    "CategoryInput",
    "CategoryUpdate",
    "Frequency",
    "Habit",
    "HabitInput",
    "HabitUpdate",
    "default_categories",
    "parse_iso_date",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Views
    "DailyDashboard",
    "DashboardEntry",
    "HabitFormData",
    "ValidationIssue",
    "ValidationResult",
]
