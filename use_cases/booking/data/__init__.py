"""Booking data layer - directory access, key-value stores and the appointment repository."""

from .directory import CosmosDirectoryService, DirectoryService, StaticDirectoryService
from .loader import CancellationToken, DoctorDirectoryLoader, RetryCancelled, ScheduledRetry
from .repository import DEFAULT_APPOINTMENTS_KEY, AppointmentRepository
from .store import InMemoryKeyValueStore, JsonFileKeyValueStore

__all__ = [
    "CosmosDirectoryService",
    "DirectoryService",
    "StaticDirectoryService",
    "CancellationToken",
    "DoctorDirectoryLoader",
    "RetryCancelled",
    "ScheduledRetry",
    "DEFAULT_APPOINTMENTS_KEY",
    "AppointmentRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
