"""
Session Management for Use Cases.

Keeps per-user flow state alive between requests from the hosting UI.
Each entry is keyed by an opaque session id and owned by one user.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar
from datetime import datetime, timedelta, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SessionEntry(Generic[T]):
    """A tracked flow object plus its ownership and timestamps."""
    session_id: str
    owner_id: str
    value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self):
        """Update the timestamp."""
        self.updated_at = datetime.now(timezone.utc)


class SessionManager(Generic[T]):
    """
    Manages flow objects across requests.

    This is a simple in-memory manager. Entries live until they are
    removed or the process exits.
    """

    def __init__(self):
        self._sessions: Dict[str, SessionEntry[T]] = {}

    @staticmethod
    def new_session_id() -> str:
        return uuid.uuid4().hex

    def add(self, owner_id: str, value: T, session_id: Optional[str] = None) -> SessionEntry[T]:
        """
        Track a new flow object.

        Args:
            owner_id: The user who owns the flow
            value: The flow object
            session_id: Id to track it under (a fresh one if omitted)

        Returns:
            The created entry
        """
        session_id = session_id or self.new_session_id()
        entry = SessionEntry(session_id=session_id, owner_id=owner_id, value=value)
        self._sessions[session_id] = entry
        logger.debug(f"Created session {session_id} for owner {owner_id}")
        return entry

    def get(self, session_id: str, owner_id: Optional[str] = None) -> Optional[SessionEntry[T]]:
        """
        Get an existing entry.

        Args:
            session_id: The session id
            owner_id: If given, the entry is only returned when owned by this user

        Returns:
            The entry if it exists (and matches the owner), None otherwise
        """
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        if owner_id is not None and entry.owner_id != owner_id:
            return None
        entry.touch()
        return entry

    def remove(self, session_id: str) -> Optional[SessionEntry[T]]:
        """
        Stop tracking an entry.

        Args:
            session_id: The session id to remove

        Returns:
            The removed entry, or None if it was not tracked
        """
        entry = self._sessions.pop(session_id, None)
        if entry is not None:
            logger.debug(f"Removed session {session_id}")
        return entry

    def remove_idle(self, max_idle: timedelta) -> List[SessionEntry[T]]:
        """
        Stop tracking entries not touched within max_idle.

        Returns:
            The removed entries, so the caller can release their values
        """
        cutoff = datetime.now(timezone.utc) - max_idle
        expired = [e for e in self._sessions.values() if e.updated_at < cutoff]
        for entry in expired:
            del self._sessions[entry.session_id]
        if expired:
            logger.info(f"Expired {len(expired)} idle sessions")
        return expired

    def __len__(self) -> int:
        return len(self._sessions)
