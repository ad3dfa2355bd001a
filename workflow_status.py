"""
Workflow Status Notices.

This module provides the status signals a workflow shows next to its form:
  ⚠️ Loading doctors with local data...
  ❌ Error booking the appointment. Please try again.
  ✅ Appointment booked!

A notice is distinct from a hard error: a degraded directory load still lets
the user continue, it only tells them the doctor list may be incomplete.

This is a GENERIC framework - each use case provides its own message table.
See use_cases/booking/status_messages.py for an example.

Usage:
    from workflow_status import create_status_tracker
    from use_cases.booking.status_messages import BOOKING_STATUS_MESSAGES

    tracker = create_status_tracker(messages=BOOKING_STATUS_MESSAGES)
    tracker.report_key("directory_degraded")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# NOTICE TYPES
# =============================================================================

class NoticeLevel(Enum):
    """Kind of status notice."""
    DEGRADED = "degraded"
    VALIDATION = "validation"
    ERROR = "error"
    SUCCESS = "success"
    CLEARED = "cleared"


@dataclass(frozen=True)
class WorkflowNotice:
    """A single status signal shown to the user."""
    level: NoticeLevel
    message: str
    key: str = ""
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict:
        return {
            "level": self.level.value,
            "message": self.message,
            "key": self.key,
            "occurred_at": self.occurred_at.isoformat(),
        }


# Used when a key has no entry in the message table
DEFAULT_STATUS = (NoticeLevel.ERROR, "Something went wrong")

NoticeListener = Callable[[WorkflowNotice], None]


def get_status_message(key: str, messages: Dict[str, Tuple[NoticeLevel, str]] = None) -> tuple:
    """Get the (level, message) pair for a status key.

    Args:
        key: The status key, e.g. "directory_degraded"
        messages: Optional custom mapping of keys to (level, message) tuples

    Returns:
        Tuple of (level, message)
    """
    if messages:
        return messages.get(key, DEFAULT_STATUS)
    return DEFAULT_STATUS


# =============================================================================
# STATUS TRACKER
# =============================================================================

@dataclass
class StatusTracker:
    """Tracks the notices raised by one workflow.

    Keeps the full history so callers can tell how many degraded signals
    were shown, and exposes the one currently on screen.
    """

    messages: Dict[str, tuple] = field(default_factory=dict)
    listeners: List[NoticeListener] = field(default_factory=list)
    history: List[WorkflowNotice] = field(default_factory=list)
    current: Optional[WorkflowNotice] = None

    def report(self, level: NoticeLevel, message: str, key: str = "") -> WorkflowNotice:
        """Record a notice and forward it to every listener."""
        notice = WorkflowNotice(level=level, message=message, key=key)
        self.history.append(notice)
        self.current = None if level == NoticeLevel.CLEARED else notice
        logger.debug(f"Notice [{level.value}] {message}")
        for listener in self.listeners:
            listener(notice)
        return notice

    def report_key(self, key: str) -> WorkflowNotice:
        """Record the notice registered under a key in the message table."""
        level, message = get_status_message(key, self.messages)
        return self.report(level, message, key=key)

    def clear(self) -> None:
        """Take the current notice off screen, if any."""
        if self.current is not None:
            self.report(NoticeLevel.CLEARED, "", key="cleared")

    def count(self, level: NoticeLevel) -> int:
        """Number of notices of a level raised so far."""
        return sum(1 for notice in self.history if notice.level == level)

    def subscribe(self, listener: NoticeListener) -> None:
        self.listeners.append(listener)


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

def create_status_tracker(
    messages: Dict[str, tuple] = None,
    listener: Optional[NoticeListener] = None,
) -> StatusTracker:
    """
    Create a StatusTracker for a workflow.

    Args:
        messages: Dict mapping status keys to (level, message) tuples.
        listener: Optional callback invoked with every notice.

    Returns:
        A StatusTracker ready to pass to a loader or workflow

    Example:
        from use_cases.booking.status_messages import BOOKING_STATUS_MESSAGES

        tracker = create_status_tracker(
            messages=BOOKING_STATUS_MESSAGES,
            listener=lambda notice: print(notice.message),
        )
    """
    tracker = StatusTracker(messages=messages or {})
    if listener is not None:
        tracker.subscribe(listener)
    return tracker
