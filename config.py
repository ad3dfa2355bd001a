"""
Configuration module for the Medical Appointment Booking App.
Loads settings from environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_host: str = Field(
        default="0.0.0.0",
        alias="APP_HOST",
        description="Host to bind the application"
    )
    app_port: int = Field(
        default=8000,
        alias="APP_PORT",
        description="Port to bind the application"
    )

    # Local Store Configuration
    data_store_path: str = Field(
        default="./data/medicalapp_store.json",
        alias="DATA_STORE_PATH",
        description="Path to the JSON file backing the local key-value store"
    )
    appointments_storage_key: str = Field(
        default="@MedicalApp:appointments",
        alias="APPOINTMENTS_STORAGE_KEY",
        description="Key under which the appointment collection is stored"
    )

    # Doctor Directory Configuration
    directory_backend: str = Field(
        default="cosmos",
        alias="DIRECTORY_BACKEND",
        description="Where doctors are loaded from: 'cosmos' or 'local'"
    )
    doctor_retry_delay_seconds: float = Field(
        default=1.0,
        alias="DOCTOR_RETRY_DELAY_SECONDS",
        description="Delay before the single retry of a failed doctor directory load"
    )

    workflow_idle_minutes: int = Field(
        default=30,
        alias="WORKFLOW_IDLE_MINUTES",
        gt=0,
        description="Open booking workflows untouched for this long are cancelled"
    )

    # Clinic Hours (used to build the time slot list)
    clinic_open_time: str = Field(
        default="08:00",
        alias="CLINIC_OPEN_TIME",
        description="First bookable time of day (HH:MM)"
    )
    clinic_close_time: str = Field(
        default="18:00",
        alias="CLINIC_CLOSE_TIME",
        description="End of the last bookable slot (HH:MM)"
    )
    slot_minutes: int = Field(
        default=60,
        alias="SLOT_MINUTES",
        gt=0,
        description="Length of a time slot in minutes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
