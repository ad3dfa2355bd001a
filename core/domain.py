"""
Domain Layer Base Classes.

The domain layer contains pure business logic with no external dependencies.
This makes business rules:
- Easy to test (no mocking needed)
- Reusable across different interfaces
- Clear and self-documenting

It also defines the error taxonomy shared by every layer. Lower layers raise
these typed errors; the workflow catches them and turns them into
user-facing messages.

Example Usage:
    class DateFilledIn(Validator):
        def validate(self, data: dict) -> None:
            if not data.get("date", "").strip():
                raise ValidationError("date", "Please choose a date")
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


# =============================================================================
# ERROR TAXONOMY
# =============================================================================

class BookingError(Exception):
    """Base class for every error raised by the booking core."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """
    A local, recoverable validation failure.

    Never touches storage or network. Shown inline; the workflow stays put.

    Attributes:
        field: The form field that failed validation
        message: Human-readable message to show the user
        code: Machine-readable failure code
    """

    def __init__(self, field: str, message: str, code: str = "required"):
        super().__init__(message)
        self.field = field
        self.code = code


class DirectoryUnavailable(BookingError):
    """The doctor directory service could not answer."""


class PersistenceError(BookingError):
    """Reading or writing the appointment collection failed."""


class StoreError(PersistenceError):
    """The underlying key-value store failed a get or set."""


class WorkflowClosed(BookingError):
    """An operation was attempted on a workflow that has been torn down."""


# =============================================================================
# VALIDATORS
# =============================================================================

class Validator(ABC):
    """
    Abstract base class for validators.

    Validators check that data meets business requirements before processing.
    """

    @abstractmethod
    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate the data.

        Args:
            data: The data to validate

        Raises:
            ValidationError: If the data does not satisfy the rule
        """
        pass

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Check if data is valid."""
        try:
            self.validate(data)
        except ValidationError:
            return False
        return True
