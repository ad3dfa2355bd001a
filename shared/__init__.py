"""
Shared modules for the Medical Appointment Booking application.

This package contains shared configuration and sample data used across the application.
"""

from shared.cosmos_config import (
    COSMOS_ENDPOINT,
    DATABASE_NAME,
    DIRECTORY_CONTAINERS,
)
from shared.sample_directory import SAMPLE_ACCOUNTS, sample_doctors

__all__ = [
    "COSMOS_ENDPOINT",
    "DATABASE_NAME",
    "DIRECTORY_CONTAINERS",
    "SAMPLE_ACCOUNTS",
    "sample_doctors",
]
