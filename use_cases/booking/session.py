"""
Booking Session State.

The wizard's steps, its transition table, and the form values the user
has entered so far.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .domain.models import Doctor


class BookingStep(Enum):
    """Steps in the appointment booking wizard."""
    DATE = "date"
    TIME = "time"
    DOCTOR = "doctor"
    CONFIRM = "confirm"

    @property
    def title(self) -> str:
        return STEP_TITLES[self][0]

    @property
    def subtitle(self) -> str:
        return STEP_TITLES[self][1]

    @property
    def label(self) -> str:
        return STEP_TITLES[self][2]


# step -> (title, subtitle, tab label)
STEP_TITLES = {
    BookingStep.DATE: ("Selecione a Data", "Escolha a data para sua consulta", "📅 Data"),
    BookingStep.TIME: ("Escolha o Horário", "Selecione um horário disponível", "🕐 Horário"),
    BookingStep.DOCTOR: ("Selecione o Médico", "Escolha o médico especialista", "👨‍⚕️ Médico"),
    BookingStep.CONFIRM: ("Confirme os Dados", "Revise os dados antes de confirmar", "✅ Confirmar"),
}

# Linear order; backward moves only ever go one step back
FORWARD_TRANSITIONS: Dict[BookingStep, BookingStep] = {
    BookingStep.DATE: BookingStep.TIME,
    BookingStep.TIME: BookingStep.DOCTOR,
    BookingStep.DOCTOR: BookingStep.CONFIRM,
}

BACKWARD_TRANSITIONS: Dict[BookingStep, BookingStep] = {
    target: source for source, target in FORWARD_TRANSITIONS.items()
}

INITIAL_STEP = BookingStep.DATE


@dataclass
class BookingForm:
    """
    Values entered in the wizard.

    Survives moving between steps in either direction; only a successful
    booking resets it.
    """
    date: str = ""
    time: str = ""
    doctor: Optional[Doctor] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "time": self.time,
            "doctor": self.doctor,
        }

    def reset(self):
        self.date = ""
        self.time = ""
        self.doctor = None
