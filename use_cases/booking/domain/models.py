"""
Booking Domain Models.

Appointment is the persisted record; its JSON layout uses camelCase keys.
Doctor is a display-only view model derived from an account record.
AccountRecord is the subset of the identity collaborator's user record
that the booking flow reads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Shown when a doctor's account has no specialty
UNSPECIFIED_SPECIALTY = "Especialidade não informada"


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class AccountRole(str, Enum):
    """Role of a user account."""
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class Appointment(BaseModel):
    """A booked appointment, stored immutably once created."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    date: str
    time: str
    specialty: str
    status: AppointmentStatus = AppointmentStatus.PENDING


class AccountRecord(BaseModel):
    """A user record owned by the identity collaborator."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    role: str = AccountRole.PATIENT.value
    specialty: Optional[str] = None
    image: str = ""
    email: Optional[str] = None

    @property
    def is_doctor(self) -> bool:
        return self.role == AccountRole.DOCTOR.value


@dataclass(frozen=True)
class Doctor:
    """A doctor as shown in the selection list."""
    id: str
    name: str
    specialty: str
    image: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty,
            "image": self.image,
        }


@dataclass(frozen=True)
class PatientIdentity:
    """The authenticated user booking the appointment."""
    id: str
    name: str
