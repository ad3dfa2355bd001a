"""
Medical Appointment Booking Use Case.

Structure:
- domain/: Pure business logic (no I/O)
  - models.py: Appointment, Doctor, AccountRecord
  - policies.py: step guards
  - services.py: doctor view model mapping, time slots, AppointmentBuilder
- data/: Data access layer
  - directory.py: doctor directory services (Cosmos DB, static)
  - loader.py: DoctorDirectoryLoader with a cancellable delayed retry
  - store.py: local key-value stores
  - repository.py: AppointmentRepository
- session.py: BookingStep, transition table, BookingForm
- workflow.py: BookingWorkflow state machine
- server.py: BookingServer wiring and workflow registry
- status_messages.py: user-facing notice texts
"""

from .server import BookingServer
from .session import BookingStep, BookingForm
from .workflow import BookingWorkflow

__all__ = [
    "BookingServer",
    "BookingStep",
    "BookingForm",
    "BookingWorkflow",
]
