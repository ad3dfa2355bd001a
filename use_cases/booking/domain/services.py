"""
Booking Domain Services.

Services that orchestrate domain logic for the booking flow.
These have NO I/O dependencies - pure calculations and transformations.
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List

from .models import (
    AccountRecord,
    Appointment,
    AppointmentStatus,
    Doctor,
    PatientIdentity,
    UNSPECIFIED_SPECIALTY,
)


# =============================================================================
# VIEW MODEL MAPPING
# =============================================================================

def to_doctor_view_model(record: AccountRecord) -> Doctor:
    """
    Convert an account record into a doctor display record.

    The specialty is only taken from accounts whose role is doctor; any
    other account, or a doctor without a specialty, gets the placeholder.
    """
    specialty = UNSPECIFIED_SPECIALTY
    if record.is_doctor and record.specialty:
        specialty = record.specialty
    return Doctor(
        id=record.id,
        name=record.name,
        specialty=specialty,
        image=record.image,
    )


def to_doctor_view_models(records: Iterable[AccountRecord]) -> List[Doctor]:
    """Map every record to a Doctor, preserving order."""
    return [to_doctor_view_model(record) for record in records]


# =============================================================================
# TIME SLOTS
# =============================================================================

class TimeSlotCalculator:
    """
    Builds the list of bookable time slot labels for a day.

    Pure logic - takes the clinic's opening hours as input.
    """

    def __init__(self, open_time: str = "08:00", close_time: str = "18:00", slot_minutes: int = 60):
        if slot_minutes <= 0:
            raise ValueError(f"slot_minutes must be positive, got {slot_minutes}")
        self.open_time = open_time
        self.close_time = close_time
        self.slot_duration = slot_minutes

    def slot_labels(self) -> List[str]:
        """
        Generate "HH:MM" labels for every slot that fits before closing.

        Returns:
            Slot start labels in chronological order
        """
        start = self._parse_time(self.open_time)
        end = self._parse_time(self.close_time)
        delta = timedelta(minutes=self.slot_duration)

        labels = []
        current = start
        while current + delta <= end:
            labels.append(current.strftime("%H:%M"))
            current += delta
        return labels

    def _parse_time(self, time_str: str) -> datetime:
        """Parse an HH:MM string onto a fixed reference day."""
        hour, minute = map(int, time_str.split(":"))
        return datetime(2000, 1, 1, hour, minute)


# =============================================================================
# APPOINTMENT ASSEMBLY
# =============================================================================

def epoch_millis_id(clock: Callable[[], float] = time.time) -> str:
    """Generate an appointment id from the current time in milliseconds."""
    return str(int(clock() * 1000))


class AppointmentBuilder:
    """
    Builds the appointment record from the completed form.

    The doctor's id, name and specialty are copied into the record, so
    later changes to the doctor's account never alter a past booking.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    def build(self, patient: PatientIdentity, doctor: Doctor, date: str, time_slot: str) -> Appointment:
        return Appointment(
            id=epoch_millis_id(self.clock),
            patient_id=patient.id,
            patient_name=patient.name,
            doctor_id=doctor.id,
            doctor_name=doctor.name,
            date=date,
            time=time_slot,
            specialty=doctor.specialty,
            status=AppointmentStatus.PENDING,
        )

    @staticmethod
    def summary(date: str, time_slot: str, doctor: Doctor = None) -> Dict[str, str]:
        """Content of the confirmation card shown before booking."""
        return {
            "date": date,
            "time": time_slot,
            "doctor_name": doctor.name if doctor else "",
            "specialty": doctor.specialty if doctor else "",
        }
