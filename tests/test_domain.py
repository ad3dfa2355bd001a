"""
Tests for the booking domain layer.

Covers the doctor view-model mapping, time slot generation, appointment
assembly and the step guards. Everything here is pure: no I/O, no fixtures
beyond plain data.
"""

import pytest

from core.domain import ValidationError
from use_cases.booking.domain.models import (
    UNSPECIFIED_SPECIALTY,
    AccountRecord,
    Appointment,
    AppointmentStatus,
    Doctor,
    PatientIdentity,
)
from use_cases.booking.domain.policies import (
    SUBMISSION_GUARD,
    AllFieldsRequired,
    RequiredField,
    guard_for,
)
from use_cases.booking.domain.services import (
    AppointmentBuilder,
    TimeSlotCalculator,
    epoch_millis_id,
    to_doctor_view_model,
    to_doctor_view_models,
)
from use_cases.booking.session import BookingStep


class TestDoctorViewModel:
    """Tests for mapping account records to doctor display records."""

    def test_doctor_with_specialty_keeps_it(self):
        """A doctor's own specialty is shown."""
        record = AccountRecord(id="d1", name="Dr. A", role="doctor", specialty="Cardiology", image="a.png")

        doctor = to_doctor_view_model(record)

        assert doctor == Doctor(id="d1", name="Dr. A", specialty="Cardiology", image="a.png")

    def test_doctor_without_specialty_gets_placeholder(self):
        """A missing specialty is replaced by the placeholder text."""
        record = AccountRecord(id="d2", name="Dr. B", role="doctor")

        assert to_doctor_view_model(record).specialty == UNSPECIFIED_SPECIALTY

    def test_empty_specialty_gets_placeholder(self):
        record = AccountRecord(id="d2", name="Dr. B", role="doctor", specialty="")

        assert to_doctor_view_model(record).specialty == UNSPECIFIED_SPECIALTY

    def test_non_doctor_role_gets_placeholder_even_with_specialty(self):
        """Specialty is only read from doctor accounts."""
        record = AccountRecord(id="x", name="Someone", role="admin", specialty="Cardiology")

        assert to_doctor_view_model(record).specialty == UNSPECIFIED_SPECIALTY

    def test_mapping_preserves_order(self):
        records = [
            AccountRecord(id=str(i), name=f"Dr. {i}", role="doctor", specialty="X")
            for i in range(5)
        ]

        doctors = to_doctor_view_models(records)

        assert [d.id for d in doctors] == ["0", "1", "2", "3", "4"]

    def test_unknown_fields_are_ignored(self):
        record = AccountRecord.model_validate(
            {"id": "d1", "name": "Dr. A", "role": "doctor", "crm": "12345", "_etag": "abc"}
        )

        assert record.is_doctor


class TestTimeSlotCalculator:
    """Tests for time slot label generation."""

    def test_default_hours_give_ten_hourly_slots(self):
        labels = TimeSlotCalculator().slot_labels()

        assert labels[0] == "08:00"
        assert labels[-1] == "17:00"
        assert len(labels) == 10

    def test_half_hour_slots(self):
        labels = TimeSlotCalculator("09:00", "10:30", slot_minutes=30).slot_labels()

        assert labels == ["09:00", "09:30", "10:00"]

    def test_slot_that_does_not_fit_before_closing_is_dropped(self):
        labels = TimeSlotCalculator("09:00", "10:30", slot_minutes=60).slot_labels()

        assert labels == ["09:00"]

    def test_closed_clinic_has_no_slots(self):
        assert TimeSlotCalculator("10:00", "10:00").slot_labels() == []

    @pytest.mark.parametrize("minutes", [0, -30])
    def test_non_positive_slot_length_is_rejected(self, minutes):
        with pytest.raises(ValueError):
            TimeSlotCalculator("08:00", "18:00", slot_minutes=minutes)


class TestAppointmentBuilder:
    """Tests for assembling the appointment record."""

    @pytest.fixture
    def builder(self):
        return AppointmentBuilder(clock=lambda: 1700000000.123)

    def test_build_copies_doctor_and_patient(self, builder, cardiologist):
        patient = PatientIdentity(id="p1", name="Ana Costa")

        appointment = builder.build(patient, cardiologist, "15/03/2025", "09:00")

        assert appointment.patient_id == "p1"
        assert appointment.patient_name == "Ana Costa"
        assert appointment.doctor_id == "d1"
        assert appointment.doctor_name == "Dr. A"
        assert appointment.specialty == "Cardiology"
        assert appointment.date == "15/03/2025"
        assert appointment.time == "09:00"

    def test_new_appointment_is_pending(self, builder, cardiologist, patient):
        appointment = builder.build(patient, cardiologist, "15/03/2025", "09:00")

        assert appointment.status == AppointmentStatus.PENDING

    def test_id_is_epoch_milliseconds(self, builder, cardiologist, patient):
        appointment = builder.build(patient, cardiologist, "15/03/2025", "09:00")

        assert appointment.id == "1700000000123"

    def test_epoch_millis_id_truncates(self):
        assert epoch_millis_id(lambda: 1.9999) == "1999"

    def test_appointment_is_immutable(self, builder, cardiologist, patient):
        appointment = builder.build(patient, cardiologist, "15/03/2025", "09:00")

        with pytest.raises(Exception):
            appointment.status = AppointmentStatus.CONFIRMED

    def test_summary_with_doctor(self, cardiologist):
        summary = AppointmentBuilder.summary("15/03/2025", "09:00", cardiologist)

        assert summary == {
            "date": "15/03/2025",
            "time": "09:00",
            "doctor_name": "Dr. A",
            "specialty": "Cardiology",
        }

    def test_summary_without_doctor_leaves_blanks(self):
        summary = AppointmentBuilder.summary("", "", None)

        assert summary["doctor_name"] == ""
        assert summary["specialty"] == ""

    def test_camel_case_aliases_round_trip(self, builder, cardiologist, patient):
        appointment = builder.build(patient, cardiologist, "15/03/2025", "09:00")

        dumped = appointment.model_dump(mode="json", by_alias=True)

        assert dumped["patientId"] == "p1"
        assert dumped["doctorName"] == "Dr. A"
        assert dumped["status"] == "pending"
        assert Appointment.model_validate(dumped) == appointment


class TestStepGuards:
    """Tests for the per-step forward guards."""

    def test_date_guard_rejects_empty_date(self):
        guard = guard_for(BookingStep.DATE)

        with pytest.raises(ValidationError) as exc_info:
            guard.validate({"date": "", "time": "", "doctor": None})

        assert exc_info.value.field == "date"
        assert exc_info.value.message == "Por favor, selecione uma data"

    def test_date_guard_rejects_whitespace_only_date(self):
        assert not guard_for(BookingStep.DATE).is_valid({"date": "   "})

    def test_date_guard_accepts_any_text(self):
        """The date is free text; its format is not checked."""
        assert guard_for(BookingStep.DATE).is_valid({"date": "amanhã"})

    def test_time_guard_requires_time(self):
        guard = guard_for(BookingStep.TIME)

        assert not guard.is_valid({"time": ""})
        assert guard.is_valid({"time": "09:00"})

    def test_doctor_guard_requires_doctor(self, cardiologist):
        guard = guard_for(BookingStep.DOCTOR)

        with pytest.raises(ValidationError) as exc_info:
            guard.validate({"doctor": None})

        assert exc_info.value.message == "Por favor, selecione um médico"
        assert guard.is_valid({"doctor": cardiologist})

    def test_confirm_step_has_no_forward_guard(self):
        assert guard_for(BookingStep.CONFIRM) is None

    def test_submission_guard_reports_single_message(self, cardiologist):
        with pytest.raises(ValidationError) as exc_info:
            SUBMISSION_GUARD.validate({"date": "01/01/2030", "time": "", "doctor": cardiologist})

        assert exc_info.value.field == "time"
        assert exc_info.value.message == "Por favor, preencha todos os campos"

    def test_submission_guard_passes_complete_form(self, cardiologist):
        assert SUBMISSION_GUARD.is_valid({"date": "01/01/2030", "time": "09:00", "doctor": cardiologist})

    def test_custom_guards(self):
        assert RequiredField("name", "date_required").is_valid({"name": "x"})
        assert not AllFieldsRequired(["a", "b"]).is_valid({"a": "1", "b": " "})
