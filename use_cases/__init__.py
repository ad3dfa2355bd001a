"""
Use Cases Package.

This package contains modular use case implementations. Each use case is a
self-contained module with its own domain rules, data access, session state
and the server object that hosts wire into.

Available use cases:
- booking: Guided medical appointment booking (date, time, doctor, confirm)

Architecture:
Each use case follows the layered architecture pattern defined in core/:
- domain/: Pure business logic (models, policies, services)
- data/: Repository pattern for data access
- session.py: Use-case-specific flow state
- server.py: Wiring exposed to hosts
"""

from use_cases.booking import BookingServer, BookingWorkflow

__all__ = [
    "BookingServer",
    "BookingWorkflow",
]
