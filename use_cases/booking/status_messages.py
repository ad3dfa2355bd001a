"""
Booking-specific status messages for workflow notices.

This module defines the user-facing messages the booking workflow shows.
Each key maps to a (level, message) tuple consumed by workflow_status.
"""

from typing import Dict

from workflow_status import NoticeLevel

BOOKING_STATUS_MESSAGES: Dict[str, tuple] = {
    # Doctor directory
    "directory_degraded": (
        NoticeLevel.DEGRADED,
        "Carregando médicos com dados locais...",
    ),
    "directory_local_fallback": (
        NoticeLevel.DEGRADED,
        "Médicos carregados com dados locais (API indisponível)",
    ),

    # Step guards
    "date_required": (
        NoticeLevel.VALIDATION,
        "Por favor, selecione uma data",
    ),
    "time_required": (
        NoticeLevel.VALIDATION,
        "Por favor, selecione um horário",
    ),
    "doctor_required": (
        NoticeLevel.VALIDATION,
        "Por favor, selecione um médico",
    ),
    "all_fields_required": (
        NoticeLevel.VALIDATION,
        "Por favor, preencha todos os campos",
    ),
    "unknown_doctor": (
        NoticeLevel.VALIDATION,
        "Médico não encontrado",
    ),
    "unknown_step": (
        NoticeLevel.VALIDATION,
        "Etapa inválida",
    ),

    # Submission
    "booking_failed": (
        NoticeLevel.ERROR,
        "Erro ao agendar consulta. Tente novamente.",
    ),
    "booking_succeeded": (
        NoticeLevel.SUCCESS,
        "Consulta agendada com sucesso!",
    ),
}


def message_for(key: str) -> str:
    """Return the message text registered under a key."""
    return BOOKING_STATUS_MESSAGES[key][1]
