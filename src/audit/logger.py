"""
Audit Logger

DESIGN DECISION: Every store mutation and every silently recovered failure
is logged. The store never surfaces storage errors to its caller, so the
log is the only place they become visible.

The audit logger:
- Is synchronous, like the store it serves
- Never raises into the caller if logging itself fails
- Keeps the last events in memory so tests and the UI can inspect them
"""

import logging
from collections import deque
from typing import Optional

import structlog

from src.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


class AuditLogger:
    """
    Central audit logging service for the habit store.
    """

    def __init__(self, history_size: int = 200, logger_name: str = "habit_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)
        self._recent: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._recent.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # A broken log handler must not break a store mutation
            logging.getLogger(__name__).exception("Failed to emit audit event")

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Oldest first."""
        return list(self._recent)

    def last_event(self) -> Optional[AuditEvent]:
        return self._recent[-1] if self._recent else None
