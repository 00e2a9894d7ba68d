"""
Audit Models for the Habit Tracker

Every store mutation and every degraded path (fallback to defaults, failed
write, refused delete) produces an audit event. Events go to the structured
log; they are not persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    STATE_LOADED = "state_loaded"
    STATE_LOAD_FAILED = "state_load_failed"
    DANGLING_CATEGORY_REPAIRED = "dangling_category_repaired"

    # Habits
    HABIT_ADDED = "habit_added"
    HABIT_UPDATED = "habit_updated"
    HABIT_DELETED = "habit_deleted"
    HABIT_COMPLETION_TOGGLED = "habit_completion_toggled"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_UPDATED = "category_updated"
    CATEGORY_DELETED = "category_deleted"
    CATEGORY_DELETE_REFUSED = "category_delete_refused"

    # No-ops on unknown ids
    ENTITY_NOT_FOUND = "entity_not_found"

    # Persistence
    PERSIST_SKIPPED_EMPTY = "persist_skipped_empty"
    PERSIST_FAILED = "persist_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_type: Optional[str] = Field(
        default=None,
        description="'habit', 'category' or 'collection'"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.habit_added(habit_id, title)
        audit_logger.log(event)
    """

    @staticmethod
    def state_loaded(habit_count: int, category_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            entity_type="collection",
            description=f"Loaded {habit_count} habits and {category_count} categories",
            details={"habits": habit_count, "categories": category_count},
        )

    @staticmethod
    def state_load_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="collection",
            entity_id=collection,
            description=f"Could not load {collection}, using defaults",
            error_message=error_message,
        )

    @staticmethod
    def dangling_category_repaired(
        habit_ids: list[str],
        missing_category_ids: list[str],
        fallback_category_id: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DANGLING_CATEGORY_REPAIRED,
            severity=AuditSeverity.WARNING,
            entity_type="habit",
            description=f"Reassigned {len(habit_ids)} habits with unknown categories",
            details={
                "habit_ids": habit_ids,
                "missing_category_ids": missing_category_ids,
                "fallback_category_id": fallback_category_id,
            },
        )

    @staticmethod
    def habit_added(habit_id: str, title: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_ADDED,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit added: {title}",
        )

    @staticmethod
    def habit_updated(habit_id: str, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_UPDATED,
            entity_type="habit",
            entity_id=habit_id,
            description="Habit updated",
            details={"fields": fields},
        )

    @staticmethod
    def habit_deleted(habit_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_DELETED,
            entity_type="habit",
            entity_id=habit_id,
            description="Habit deleted",
        )

    @staticmethod
    def completion_toggled(habit_id: str, day: str, completed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_COMPLETION_TOGGLED,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit marked {'done' if completed else 'not done'} for {day}",
            details={"date": day, "completed": completed},
        )

    @staticmethod
    def category_added(category_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category added: {name}",
        )

    @staticmethod
    def category_updated(category_id: str, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_UPDATED,
            entity_type="category",
            entity_id=category_id,
            description="Category updated",
            details={"fields": fields},
        )

    @staticmethod
    def category_deleted(
        category_id: str,
        fallback_category_id: Optional[str],
        reassigned_habit_ids: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category deleted, {len(reassigned_habit_ids)} habits reassigned",
            details={
                "fallback_category_id": fallback_category_id,
                "reassigned_habit_ids": reassigned_habit_ids,
            },
        )

    @staticmethod
    def category_delete_refused(category_id: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_DELETE_REFUSED,
            severity=AuditSeverity.WARNING,
            entity_type="category",
            entity_id=category_id,
            description=f"Category not deleted: {reason}",
        )

    @staticmethod
    def entity_not_found(entity_type: str, entity_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTITY_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{operation} ignored: {entity_type} not found",
            details={"operation": operation},
        )

    @staticmethod
    def persist_skipped_empty(collection: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_SKIPPED_EMPTY,
            severity=AuditSeverity.DEBUG,
            entity_type="collection",
            entity_id=collection,
            description=f"{collection} is empty, stored value left unchanged",
        )

    @staticmethod
    def persist_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="collection",
            entity_id=collection,
            description=f"Failed to write {collection}",
            error_message=error_message,
        )
