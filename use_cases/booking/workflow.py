"""
Booking Workflow.

Drives the four-step booking wizard (date -> time -> doctor -> confirm).
Forward moves are gated by the step guards; backward moves go one step
back and never clear entered values; the tab bar may jump to any step
without running a guard. Submitting re-checks every field because a jump
can reach the confirm step with fields still empty.

The hosting UI renders snapshot() and calls the public operations.
"""

import logging
from typing import Callable, List, Optional, Union

from core.domain import PersistenceError, ValidationError, WorkflowClosed
from workflow_status import StatusTracker

from .data.loader import CancellationToken, DoctorDirectoryLoader
from .data.repository import AppointmentRepository
from .domain.models import Appointment, Doctor, PatientIdentity
from .domain.policies import SUBMISSION_GUARD, guard_for
from .domain.services import AppointmentBuilder, to_doctor_view_models
from .session import (
    BACKWARD_TRANSITIONS,
    FORWARD_TRANSITIONS,
    INITIAL_STEP,
    BookingForm,
    BookingStep,
)
from .status_messages import message_for

logger = logging.getLogger(__name__)


class BookingWorkflow:
    """State machine behind the appointment booking wizard."""

    def __init__(
        self,
        patient: PatientIdentity,
        loader: DoctorDirectoryLoader,
        repository: AppointmentRepository,
        status: StatusTracker,
        builder: Optional[AppointmentBuilder] = None,
        time_slots: Optional[List[str]] = None,
        on_complete: Optional[Callable[[Appointment], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the workflow.

        Args:
            patient: The authenticated user booking the appointment
            loader: Loads the doctor list once during initialization
            repository: Where the confirmed appointment is stored
            status: Tracker for directory and booking notices
            builder: Assembles the appointment record
            time_slots: Slot labels offered on the time step
            on_complete: Called with the stored appointment after a booking
            on_cancel: Called when the user abandons the flow
        """
        self.patient = patient
        self.status = status
        self.time_slots = list(time_slots or [])

        self._loader = loader
        self._repository = repository
        self._builder = builder or AppointmentBuilder()
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._token = CancellationToken()
        self._initialized = False

        self.step: BookingStep = INITIAL_STEP
        self.form = BookingForm()
        self.doctors: List[Doctor] = []
        self.loading_doctors = False
        self.submitting = False
        self.error_message = ""
        self.closed = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def initialize(self) -> None:
        """Load the doctor list. Runs at most once per workflow."""
        if self._initialized:
            return
        self._initialized = True
        self.loading_doctors = True

        records = await self._loader.load(self._token)

        if self._token.is_cancelled:
            return
        self.doctors = to_doctor_view_models(records)
        self.loading_doctors = False

    def cancel(self) -> bool:
        """
        Abandon the flow and hand control back to the caller.

        Ignored while a submission is being stored; the booking completes
        and the completion callback runs instead.

        Returns:
            True if the workflow was torn down by this call
        """
        if self.closed:
            return False
        if self.submitting:
            logger.info(f"Cancel ignored for {self.patient.id}: appointment is being stored")
            return False
        logger.info(f"Booking workflow cancelled by {self.patient.id}")
        self._teardown()
        if self._on_cancel:
            self._on_cancel()
        return True

    def _teardown(self):
        self._token.cancel()
        self.closed = True
        self.form.reset()
        self.step = INITIAL_STEP
        self.error_message = ""
        self.loading_doctors = False

    def _ensure_open(self):
        if self.closed:
            raise WorkflowClosed("This booking workflow is closed")

    # =========================================================================
    # FORM FIELDS
    # =========================================================================

    def set_date(self, value: str) -> None:
        self._ensure_open()
        self.form.date = value

    def select_time(self, label: str) -> None:
        self._ensure_open()
        self.form.time = label

    def select_doctor(self, doctor: Optional[Doctor]) -> None:
        self._ensure_open()
        self.form.doctor = doctor

    def select_doctor_by_id(self, doctor_id: str) -> bool:
        """
        Select one of the loaded doctors by id.

        Returns:
            True if the doctor was found and selected
        """
        self._ensure_open()
        for doctor in self.doctors:
            if doctor.id == doctor_id:
                self.form.doctor = doctor
                return True
        self.error_message = message_for("unknown_doctor")
        return False

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def advance(self) -> bool:
        """
        Move to the next step if the current step's guard holds.

        Returns:
            True if the step changed
        """
        self._ensure_open()
        self.error_message = ""

        target = FORWARD_TRANSITIONS.get(self.step)
        if target is None:
            return False

        guard = guard_for(self.step)
        if guard is not None:
            try:
                guard.validate(self.form.to_dict())
            except ValidationError as e:
                self.error_message = e.message
                return False

        self.step = target
        return True

    def retreat(self) -> bool:
        """
        Move back to the previous step. Entered values are kept.

        Returns:
            True if the step changed
        """
        self._ensure_open()
        self.error_message = ""

        target = BACKWARD_TRANSITIONS.get(self.step)
        if target is None:
            return False
        self.step = target
        return True

    def jump_to(self, step: Union[BookingStep, str]) -> None:
        """
        Go straight to any step, as the tab bar does. No guard runs.

        Raises:
            ValidationError: If the step is not one of the wizard steps
        """
        self._ensure_open()
        try:
            target = BookingStep(step)
        except ValueError as e:
            raise ValidationError("step", message_for("unknown_step"), code="unknown_step") from e
        self.error_message = ""
        self.step = target

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    async def submit(self) -> Optional[Appointment]:
        """
        Book the appointment.

        Returns:
            The stored appointment, or None if validation or storage failed
            (error_message says why) or a submission is already running
        """
        self._ensure_open()
        if self.submitting:
            return None
        self.error_message = ""

        try:
            SUBMISSION_GUARD.validate(self.form.to_dict())
        except ValidationError as e:
            self.error_message = e.message
            return None

        appointment = self._builder.build(
            patient=self.patient,
            doctor=self.form.doctor,
            date=self.form.date,
            time_slot=self.form.time,
        )

        self.submitting = True
        try:
            await self._repository.append(appointment)
        except PersistenceError as e:
            logger.error(f"Failed to store appointment for {self.patient.id}: {e}", exc_info=True)
            self.error_message = message_for("booking_failed")
            return None
        finally:
            self.submitting = False

        logger.info(f"Appointment {appointment.id} booked with {appointment.doctor_name} on {appointment.date} {appointment.time}")
        self.status.report_key("booking_succeeded")
        self._teardown()
        if self._on_complete:
            self._on_complete(appointment)
        return appointment

    # =========================================================================
    # RENDERING
    # =========================================================================

    def summary(self) -> dict:
        """Content of the confirmation card."""
        return AppointmentBuilder.summary(self.form.date, self.form.time, self.form.doctor)

    def snapshot(self) -> dict:
        """Everything the hosting UI needs to render the current state."""
        notice = self.status.current
        return {
            "step": self.step.value,
            "title": self.step.title,
            "subtitle": self.step.subtitle,
            "steps": [
                {"step": s.value, "label": s.label, "active": s == self.step}
                for s in BookingStep
            ],
            "can_go_back": self.step in BACKWARD_TRANSITIONS,
            "can_advance": self.step in FORWARD_TRANSITIONS,
            "fields": {
                "date": self.form.date,
                "time": self.form.time,
                "doctor": self.form.doctor.to_dict() if self.form.doctor else None,
            },
            "summary": self.summary(),
            "time_slots": list(self.time_slots),
            "doctors": [d.to_dict() for d in self.doctors],
            "loading_doctors": self.loading_doctors,
            "submitting": self.submitting,
            "error_message": self.error_message,
            "notice": notice.to_dict() if notice else None,
            "closed": self.closed,
        }
