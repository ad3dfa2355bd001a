"""
Sample account records for the Medical Appointment Booking App.

Used to seed the Cosmos DB users container, as the local doctor directory
when the remote one cannot be reached, and as the demo login accounts.
"""

from typing import Any, Dict, List

SAMPLE_ACCOUNTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Dr. João Silva",
        "email": "joao@example.com",
        "role": "doctor",
        "specialty": "Cardiologia",
        "image": "https://randomuser.me/api/portraits/men/1.jpg",
    },
    {
        "id": "2",
        "name": "Dra. Maria Santos",
        "email": "maria@example.com",
        "role": "doctor",
        "specialty": "Pediatria",
        "image": "https://randomuser.me/api/portraits/women/1.jpg",
    },
    {
        "id": "3",
        "name": "Dr. Pedro Oliveira",
        "email": "pedro@example.com",
        "role": "doctor",
        "specialty": "Ortopedia",
        "image": "https://randomuser.me/api/portraits/men/2.jpg",
    },
    {
        "id": "admin",
        "name": "Administrador",
        "email": "admin@example.com",
        "role": "admin",
        "image": "https://randomuser.me/api/portraits/men/3.jpg",
    },
    {
        "id": "patient-1",
        "name": "Ana Costa",
        "email": "ana@example.com",
        "role": "patient",
        "image": "https://randomuser.me/api/portraits/women/2.jpg",
    },
]


def sample_doctors() -> List[Dict[str, Any]]:
    """Return copies of the sample accounts whose role is doctor."""
    return [dict(account) for account in SAMPLE_ACCOUNTS if account["role"] == "doctor"]


def find_sample_account(email: str) -> Dict[str, Any]:
    """Look up a sample account by email, or return an empty dict."""
    for account in SAMPLE_ACCOUNTS:
        if account["email"].lower() == email.lower():
            return dict(account)
    return {}
