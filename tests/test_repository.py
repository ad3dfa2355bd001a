"""
Tests for the appointment repository and the local key-value stores.
"""

import asyncio
import json
import os
from unittest.mock import AsyncMock

import pytest

from core.domain import PersistenceError, StoreError
from use_cases.booking.data.repository import DEFAULT_APPOINTMENTS_KEY, AppointmentRepository
from use_cases.booking.data.store import InMemoryKeyValueStore, JsonFileKeyValueStore
from use_cases.booking.domain.models import Appointment, AppointmentStatus


def make_appointment(appointment_id: str, patient_id: str = "p1") -> Appointment:
    return Appointment(
        id=appointment_id,
        patient_id=patient_id,
        patient_name="Ana Costa",
        doctor_id="d1",
        doctor_name="Dr. A",
        date="15/03/2025",
        time="09:00",
        specialty="Cardiology",
    )


class TestAppointmentRepository:
    """Tests for the read-modify-write appointment collection."""

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, repository):
        assert await repository.list_appointments() == []

    @pytest.mark.asyncio
    async def test_append_adds_exactly_one_record(self, repository):
        """Existing records are kept, in order, and the new one goes last."""
        existing = [make_appointment("1"), make_appointment("2")]
        for appointment in existing:
            await repository.append(appointment)

        new = make_appointment("3")
        await repository.append(new)

        stored = await repository.list_appointments()
        assert len(stored) == 3
        assert stored[:2] == existing
        assert stored[-1] == new
        assert stored[-1].status == AppointmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_concurrent_appends_keep_every_record(self, repository):
        """Two appends started together both end up in the collection."""
        first, second = make_appointment("1", patient_id="p1"), make_appointment("2", patient_id="p2")

        await asyncio.gather(repository.append(first), repository.append(second))

        stored = await repository.list_appointments()
        assert sorted(a.id for a in stored) == ["1", "2"]

    @pytest.mark.asyncio
    async def test_append_writes_once(self, repository, store):
        await repository.append(make_appointment("1"))

        assert store.set_calls == 1

    @pytest.mark.asyncio
    async def test_stored_blob_uses_camel_case_keys(self, repository, store):
        await repository.append(make_appointment("1"))

        blob = await store.get(DEFAULT_APPOINTMENTS_KEY)
        records = json.loads(blob)

        assert records == [
            {
                "id": "1",
                "patientId": "p1",
                "patientName": "Ana Costa",
                "doctorId": "d1",
                "doctorName": "Dr. A",
                "date": "15/03/2025",
                "time": "09:00",
                "specialty": "Cardiology",
                "status": "pending",
            }
        ]

    @pytest.mark.asyncio
    async def test_reads_collection_written_by_other_clients(self):
        blob = json.dumps([
            {
                "id": "99",
                "patientId": "p2",
                "patientName": "Bruno",
                "doctorId": "2",
                "doctorName": "Dra. Maria Santos",
                "date": "10/10/2030",
                "time": "14:00",
                "specialty": "Pediatria",
                "status": "confirmed",
            }
        ])
        repository = AppointmentRepository(InMemoryKeyValueStore({DEFAULT_APPOINTMENTS_KEY: blob}))

        stored = await repository.list_appointments()

        assert stored[0].patient_id == "p2"
        assert stored[0].status == AppointmentStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_custom_key(self):
        store = InMemoryKeyValueStore()
        repository = AppointmentRepository(store, key="other")

        await repository.append(make_appointment("1"))

        assert await store.get("other") is not None
        assert await store.get(DEFAULT_APPOINTMENTS_KEY) is None

    @pytest.mark.asyncio
    async def test_read_failure_raises_persistence_error(self, repository, store):
        store.fail_get = True

        with pytest.raises(PersistenceError):
            await repository.list_appointments()

    @pytest.mark.asyncio
    async def test_write_failure_raises_and_leaves_collection_unchanged(self, repository, store):
        await repository.append(make_appointment("1"))
        store.fail_set = True

        with pytest.raises(PersistenceError):
            await repository.append(make_appointment("2"))

        store.fail_set = False
        assert [a.id for a in await repository.list_appointments()] == ["1"]

    @pytest.mark.asyncio
    async def test_unexpected_store_exception_is_wrapped(self):
        store = AsyncMock()
        store.get.side_effect = RuntimeError("boom")
        repository = AppointmentRepository(store)

        with pytest.raises(PersistenceError) as exc_info:
            await repository.list_appointments()

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_corrupt_blob_raises_persistence_error(self):
        repository = AppointmentRepository(InMemoryKeyValueStore({DEFAULT_APPOINTMENTS_KEY: "not json"}))

        with pytest.raises(PersistenceError):
            await repository.list_appointments()

    @pytest.mark.asyncio
    async def test_corrupt_blob_blocks_append(self):
        store = InMemoryKeyValueStore({DEFAULT_APPOINTMENTS_KEY: '{"id": 1}'})
        repository = AppointmentRepository(store)

        with pytest.raises(PersistenceError):
            await repository.append(make_appointment("1"))

        assert await store.get(DEFAULT_APPOINTMENTS_KEY) == '{"id": 1}'

    @pytest.mark.asyncio
    async def test_list_for_patient(self, repository):
        await repository.append(make_appointment("1", patient_id="p1"))
        await repository.append(make_appointment("2", patient_id="p2"))
        await repository.append(make_appointment("3", patient_id="p1"))

        mine = await repository.list_for_patient("p1")

        assert [a.id for a in mine] == ["1", "3"]

    @pytest.mark.asyncio
    async def test_get_by_id(self, repository):
        await repository.append(make_appointment("1"))

        assert (await repository.get_by_id("1")).id == "1"
        assert await repository.get_by_id("missing") is None


class TestJsonFileKeyValueStore:
    """Tests for the file-backed store."""

    @pytest.mark.asyncio
    async def test_missing_file_reads_as_empty(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")

        assert await store.get("anything") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "nested" / "store.json")

        await store.set("a", "1")
        await store.set("b", "2")

        assert await store.get("a") == "1"
        assert await store.get("b") == "2"

    @pytest.mark.asyncio
    async def test_value_survives_a_new_store_instance(self, tmp_path):
        path = tmp_path / "store.json"
        await JsonFileKeyValueStore(path).set("key", "value")

        assert await JsonFileKeyValueStore(path).get("key") == "value"

    @pytest.mark.asyncio
    async def test_no_temporary_files_left_behind(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")

        await store.set("a", "1")

        assert os.listdir(tmp_path) == ["store.json"]

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_store_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileKeyValueStore(path)

        with pytest.raises(StoreError):
            await store.get("a")

    @pytest.mark.asyncio
    async def test_non_object_file_raises_store_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(StoreError):
            await JsonFileKeyValueStore(path).set("a", "1")

    @pytest.mark.asyncio
    async def test_repository_over_file_store(self, tmp_path):
        repository = AppointmentRepository(JsonFileKeyValueStore(tmp_path / "store.json"))

        await repository.append(make_appointment("1"))
        await repository.append(make_appointment("2"))

        assert [a.id for a in await repository.list_appointments()] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_concurrent_appends_over_file_store(self, tmp_path):
        repository = AppointmentRepository(JsonFileKeyValueStore(tmp_path / "store.json"))

        await asyncio.gather(
            repository.append(make_appointment("1", patient_id="p1")),
            repository.append(make_appointment("2", patient_id="p2")),
        )

        assert sorted(a.id for a in await repository.list_appointments()) == ["1", "2"]
