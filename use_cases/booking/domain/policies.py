"""
Booking Domain Policies.

Step guards for the booking wizard. These classes have NO I/O dependencies -
they can be unit tested in isolation.
"""

from typing import Any, Dict, Optional, Sequence

from core.domain import ValidationError, Validator

from ..session import BookingStep
from ..status_messages import message_for


def _filled(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


class RequiredField(Validator):
    """
    A form field must hold a value.

    String values are trimmed before the check when strip is set, so a
    whitespace-only date does not count as filled in.
    """

    def __init__(self, field: str, message_key: str, strip: bool = False):
        self.field = field
        self.message_key = message_key
        self.strip = strip

    def validate(self, data: Dict[str, Any]) -> None:
        value = data.get(self.field)
        if isinstance(value, str) and self.strip:
            value = value.strip()
        if not value:
            raise ValidationError(self.field, message_for(self.message_key))


class AllFieldsRequired(Validator):
    """Every listed field must hold a value; reports a single combined message."""

    def __init__(self, fields: Sequence[str], message_key: str = "all_fields_required"):
        self.fields = list(fields)
        self.message_key = message_key

    def validate(self, data: Dict[str, Any]) -> None:
        missing = [name for name in self.fields if not _filled(data.get(name))]
        if missing:
            raise ValidationError(missing[0], message_for(self.message_key))


# =============================================================================
# GUARD TABLE
# =============================================================================

# Guard that must pass before leaving a step forward
STEP_GUARDS: Dict[BookingStep, Validator] = {
    BookingStep.DATE: RequiredField("date", "date_required", strip=True),
    BookingStep.TIME: RequiredField("time", "time_required"),
    BookingStep.DOCTOR: RequiredField("doctor", "doctor_required"),
}

SUBMISSION_GUARD = AllFieldsRequired(["date", "time", "doctor"])


def guard_for(step: BookingStep) -> Optional[Validator]:
    """Return the forward guard of a step, or None if the step has none."""
    return STEP_GUARDS.get(step)
