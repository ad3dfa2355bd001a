"""
Appointment Repository.

Read-modify-write store of appointment records kept as one JSON list under
a single key. Append-only: records are never updated or deleted here.

append() holds a lock from the read to the write, so appends made through
the same repository never overwrite each other. Writers in other processes
are not coordinated.
"""

import asyncio
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from core.data import AppendOnlyRepository, KeyValueStore
from core.domain import PersistenceError

from ..domain.models import Appointment

logger = logging.getLogger(__name__)

DEFAULT_APPOINTMENTS_KEY = "@MedicalApp:appointments"

_appointment_list_adapter = TypeAdapter(List[Appointment])


class AppointmentRepository(AppendOnlyRepository[Appointment]):
    """Appointment collection persisted through a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_APPOINTMENTS_KEY):
        """
        Initialize the repository.

        Args:
            store: The key-value store holding the collection
            key: The key the collection is stored under
        """
        self._store = store
        self._key = key
        self._lock = asyncio.Lock()

    async def list_appointments(self) -> List[Appointment]:
        """
        Read every stored appointment, oldest first.

        Returns:
            The appointments, or an empty list if none were stored yet

        Raises:
            PersistenceError: If the store cannot be read or holds invalid data
        """
        try:
            blob = await self._store.get(self._key)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to read appointments: {e}") from e

        if not blob:
            return []

        try:
            return _appointment_list_adapter.validate_json(blob)
        except PydanticValidationError as e:
            raise PersistenceError(f"Stored appointments are unreadable: {e}") from e

    async def list_all(self) -> List[Appointment]:
        return await self.list_appointments()

    async def append(self, appointment: Appointment) -> None:
        """
        Add an appointment to the end of the collection.

        The whole collection is written back in a single set call.

        Raises:
            PersistenceError: If reading or writing the collection fails
        """
        async with self._lock:
            appointments = await self.list_appointments()
            appointments.append(appointment)
            blob = _appointment_list_adapter.dump_json(appointments, by_alias=True).decode("utf-8")

            try:
                await self._store.set(self._key, blob)
            except PersistenceError:
                raise
            except Exception as e:
                raise PersistenceError(f"Failed to write appointments: {e}") from e

        logger.info(f"Stored appointment {appointment.id} ({len(appointments)} total)")

    async def list_for_patient(self, patient_id: str) -> List[Appointment]:
        """Appointments booked by one patient."""
        return [a for a in await self.list_appointments() if a.patient_id == patient_id]

    async def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        """Look up an appointment by id."""
        for appointment in await self.list_appointments():
            if appointment.id == appointment_id:
                return appointment
        return None
