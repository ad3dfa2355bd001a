"""
Booking Server.

Wires the directory, repository and status tracking into one workflow per
booking attempt and keeps the open workflows between requests.
"""

import asyncio
import logging
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from config import Settings, settings as default_settings
from core.data import KeyValueStore
from core.session import SessionEntry, SessionManager
from workflow_status import create_status_tracker

from .data.directory import CosmosDirectoryService, DirectoryService, StaticDirectoryService
from .data.loader import DoctorDirectoryLoader, Sleep
from .data.repository import AppointmentRepository
from .data.store import JsonFileKeyValueStore
from .domain.models import Appointment, PatientIdentity
from .domain.services import AppointmentBuilder, TimeSlotCalculator
from .status_messages import BOOKING_STATUS_MESSAGES
from .workflow import BookingWorkflow

logger = logging.getLogger(__name__)


class BookingServer:
    """
    Entry point for hosts that drive booking workflows.

    Each started workflow is tracked until it completes, is cancelled or
    sits idle past the configured timeout; all three remove it from the
    registry.
    """

    def __init__(
        self,
        directory: DirectoryService,
        store: KeyValueStore,
        config: Settings = default_settings,
        builder: Optional[AppointmentBuilder] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the server.

        Args:
            directory: Source of doctor accounts
            store: Local key-value store holding the appointment collection
            config: Application settings
            builder: Appointment assembler (defaults to a clock-based one)
            sleep: Awaitable sleep used for the directory retry delay
        """
        self.directory = directory
        self.store = store
        self.config = config
        self.repository = AppointmentRepository(store, key=config.appointments_storage_key)
        self.workflows: SessionManager[BookingWorkflow] = SessionManager()
        self._builder = builder or AppointmentBuilder()
        self._sleep = sleep
        self._time_slots = TimeSlotCalculator(
            open_time=config.clinic_open_time,
            close_time=config.clinic_close_time,
            slot_minutes=config.slot_minutes,
        ).slot_labels()

    @classmethod
    def from_settings(cls, config: Settings = default_settings) -> "BookingServer":
        """Build a server with the directory backend and store named in settings."""
        if config.directory_backend == "local":
            directory: DirectoryService = StaticDirectoryService()
        else:
            directory = CosmosDirectoryService()
        store = JsonFileKeyValueStore(Path(config.data_store_path))
        logger.info(f"Booking server using '{config.directory_backend}' directory and store {config.data_store_path}")
        return cls(directory=directory, store=store, config=config)

    def start_workflow(self, patient: PatientIdentity) -> SessionEntry[BookingWorkflow]:
        """
        Create and track a workflow for a patient.

        The caller awaits workflow.initialize() to load the doctor list.
        """
        self.expire_idle_workflows()

        status = create_status_tracker(messages=BOOKING_STATUS_MESSAGES)
        loader = DoctorDirectoryLoader(
            self.directory,
            status,
            retry_delay=self.config.doctor_retry_delay_seconds,
            sleep=self._sleep,
        )
        workflow_id = self.workflows.new_session_id()
        workflow = BookingWorkflow(
            patient=patient,
            loader=loader,
            repository=self.repository,
            status=status,
            builder=self._builder,
            time_slots=self._time_slots,
            on_complete=lambda appointment: self._finish(workflow_id),
            on_cancel=lambda: self._finish(workflow_id),
        )
        entry = self.workflows.add(patient.id, workflow, session_id=workflow_id)
        logger.info(f"Started booking workflow {entry.session_id} for {patient.id}")
        return entry

    def expire_idle_workflows(self) -> int:
        """
        Cancel and forget workflows nobody has touched for the idle timeout.

        Returns:
            Number of workflows expired
        """
        expired = self.workflows.remove_idle(timedelta(minutes=self.config.workflow_idle_minutes))
        for entry in expired:
            entry.value.cancel()
        return len(expired)

    def get_workflow(self, workflow_id: str, owner_id: Optional[str] = None) -> Optional[BookingWorkflow]:
        entry = self.workflows.get(workflow_id, owner_id=owner_id)
        return entry.value if entry else None

    def _finish(self, workflow_id: str):
        self.workflows.remove(workflow_id)

    async def list_appointments(self, patient_id: Optional[str] = None) -> List[Appointment]:
        """All appointments, or only one patient's when patient_id is given."""
        if patient_id is None:
            return await self.repository.list_appointments()
        return await self.repository.list_for_patient(patient_id)
