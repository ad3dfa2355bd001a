"""Booking domain layer - pure business logic."""

from .models import (
    AccountRecord,
    AccountRole,
    Appointment,
    AppointmentStatus,
    Doctor,
    PatientIdentity,
    UNSPECIFIED_SPECIALTY,
)
from .services import (
    AppointmentBuilder,
    TimeSlotCalculator,
    to_doctor_view_model,
    to_doctor_view_models,
)

__all__ = [
    "AccountRecord",
    "AccountRole",
    "Appointment",
    "AppointmentStatus",
    "Doctor",
    "PatientIdentity",
    "UNSPECIFIED_SPECIALTY",
    "AppointmentBuilder",
    "TimeSlotCalculator",
    "to_doctor_view_model",
    "to_doctor_view_models",
]
