"""
Shared pytest fixtures for all tests.

Provides fake collaborators (directory, key-value store, sleep) and
factories for loaders, repositories and workflows.
"""

import asyncio
from typing import Callable, List, Optional

import pytest

from config import Settings
from core.data import KeyValueStore
from core.domain import DirectoryUnavailable, StoreError
from workflow_status import StatusTracker, create_status_tracker

from use_cases.booking.data.directory import DirectoryService
from use_cases.booking.data.loader import DoctorDirectoryLoader
from use_cases.booking.data.repository import AppointmentRepository
from use_cases.booking.data.store import InMemoryKeyValueStore
from use_cases.booking.domain.models import AccountRecord, Doctor, PatientIdentity
from use_cases.booking.domain.services import AppointmentBuilder
from use_cases.booking.status_messages import BOOKING_STATUS_MESSAGES
from use_cases.booking.workflow import BookingWorkflow


# ============================================================================
# FAKE COLLABORATORS
# ============================================================================


class FakeDirectory(DirectoryService):
    """Directory that plays back a scripted list of outcomes.

    Each outcome is either a list of records (returned) or an exception
    (raised). Once the script runs out, an empty list is returned.
    """

    def __init__(self, outcomes: Optional[list] = None, local: Optional[List[AccountRecord]] = None):
        self._outcomes = list(outcomes or [])
        self._local = list(local or [])
        self.calls = 0
        self.local_calls = 0

    async def get_all_doctors(self) -> List[AccountRecord]:
        self.calls += 1
        outcome = self._outcomes.pop(0) if self._outcomes else []
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    def resolve_local(self) -> List[AccountRecord]:
        self.local_calls += 1
        return list(self._local)


class FlakyStore(KeyValueStore):
    """In-memory store whose reads or writes can be made to fail.

    Every read yields to the event loop like real I/O would. When set_gate
    is given, writes wait for it before landing.
    """

    def __init__(self, initial: Optional[dict] = None):
        self._inner = InMemoryKeyValueStore(initial)
        self.fail_get = False
        self.fail_set = False
        self.set_calls = 0
        self.set_gate: Optional[asyncio.Event] = None

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        if self.fail_get:
            raise StoreError("disk unavailable")
        return await self._inner.get(key)

    async def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        if self.set_gate is not None:
            await self.set_gate.wait()
        if self.fail_set:
            raise StoreError("disk full")
        await self._inner.set(key, value)


class RecordingSleep:
    """Awaitable sleep replacement that returns immediately and records delays."""

    def __init__(self):
        self.delays: List[float] = []
        self.before_return: Optional[Callable[[], None]] = None

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.before_return is not None:
            self.before_return()


# ============================================================================
# DATA FIXTURES
# ============================================================================


@pytest.fixture
def doctor_records() -> List[AccountRecord]:
    """Two doctor accounts as the directory would return them."""
    return [
        AccountRecord(id="d1", name="Dr. A", role="doctor", specialty="Cardiology", image="a.png"),
        AccountRecord(id="d2", name="Dr. B", role="doctor", image="b.png"),
    ]


@pytest.fixture
def cardiologist() -> Doctor:
    return Doctor(id="d1", name="Dr. A", specialty="Cardiology", image="a.png")


@pytest.fixture
def patient() -> PatientIdentity:
    return PatientIdentity(id="p1", name="Ana Costa")


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a temporary store with no retry delay."""
    return Settings(
        DATA_STORE_PATH=str(tmp_path / "store.json"),
        DIRECTORY_BACKEND="local",
        DOCTOR_RETRY_DELAY_SECONDS=0,
    )


# ============================================================================
# COMPONENT FIXTURES
# ============================================================================


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def status() -> StatusTracker:
    return create_status_tracker(messages=BOOKING_STATUS_MESSAGES)


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def repository(store: FlakyStore) -> AppointmentRepository:
    return AppointmentRepository(store)


@pytest.fixture
def make_directory() -> Callable[..., FakeDirectory]:
    return FakeDirectory


@pytest.fixture
def make_workflow(patient, repository, status, sleep, doctor_records):
    """Factory building a workflow around a scripted directory."""

    def _make(outcomes: Optional[list] = None, **kwargs) -> BookingWorkflow:
        directory = FakeDirectory(outcomes if outcomes is not None else [doctor_records])
        loader = DoctorDirectoryLoader(directory, status, retry_delay=1.0, sleep=sleep)
        workflow = BookingWorkflow(
            patient=patient,
            loader=loader,
            repository=repository,
            status=status,
            builder=AppointmentBuilder(clock=lambda: 1700000000.123),
            time_slots=["09:00", "10:00"],
            **kwargs,
        )
        workflow.directory = directory
        return workflow

    return _make


@pytest.fixture
def directory_down() -> DirectoryUnavailable:
    return DirectoryUnavailable("connection refused")
