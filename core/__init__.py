"""
Core Framework for Use Cases.

This module provides the extensible base classes and interfaces
that use cases implement. The layered architecture ensures:

1. Domain Layer - Pure business rules and the shared error taxonomy, no I/O
2. Data Layer - Repository and key-value store abstractions
3. Session Layer - Per-user flow state kept between requests
"""

from .domain import (
    BookingError,
    DirectoryUnavailable,
    PersistenceError,
    StoreError,
    ValidationError,
    Validator,
    WorkflowClosed,
)
from .data import AppendOnlyRepository, KeyValueStore
from .session import SessionEntry, SessionManager

__all__ = [
    # Domain
    "BookingError",
    "DirectoryUnavailable",
    "PersistenceError",
    "StoreError",
    "ValidationError",
    "Validator",
    "WorkflowClosed",
    # Data
    "AppendOnlyRepository",
    "KeyValueStore",
    # Session
    "SessionEntry",
    "SessionManager",
]
