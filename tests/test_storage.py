"""Almacenes en memoria y documento JSON."""

import asyncio
import json

import pytest

from app.core.config import Settings
from app.models.records import Appointment, CaseReport
from app.models.session import Session
from app.services.storage import (
    InMemoryRecordStore,
    InMemorySessionStore,
    JsonDocument,
    JsonRecordStore,
    JsonSessionStore,
    StorageError,
    build_stores,
)
from conftest import USER


def make_appointment(**overrides):
    data = dict(user_id=USER, name="Ana", phone="+50688887777", date="2025-12-05", time="10:00", branch_id="palmares")
    data.update(overrides)
    return Appointment(**data)


class TestJsonDocument:

    def test_new_file_is_seeded(self, tmp_path):
        path = tmp_path / "db.json"

        JsonDocument(str(path))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["sessions"] == {}
        assert data["appointments"] == []
        assert data["reports"] == []
        assert [b["id"] for b in data["branches"]] == ["sjo-centro", "palmares"]
        assert data["prices"]["reparacion_minima"] == 12000
        assert data["inventory"]["ssd-256"]["price"] == 35000

    def test_missing_collections_are_added(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"appointments": [{"id": "X"}]}), encoding="utf-8")

        document = JsonDocument(str(path))

        assert document.data["appointments"] == [{"id": "X"}]
        assert "reports" in json.loads(path.read_text(encoding="utf-8"))

    def test_unreadable_file_raises(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{no es json", encoding="utf-8")

        with pytest.raises(StorageError):
            JsonDocument(str(path))


class TestJsonStores:

    @pytest.mark.asyncio
    async def test_session_survives_reload(self, tmp_path):
        path = str(tmp_path / "db.json")
        store = JsonSessionStore(JsonDocument(path))
        await store.upsert(Session(user_id=USER, state="cita_nombre", flow="cita", answers={"sucursal": "Palmares"}))

        reloaded = JsonSessionStore(JsonDocument(path))
        session = await reloaded.get(USER)

        assert session.state == "cita_nombre"
        assert session.flow == "cita"
        assert session.answers == {"sucursal": "Palmares"}
        assert session.updated_at is not None

    @pytest.mark.asyncio
    async def test_invalid_session_is_discarded(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"sessions": {USER: {"state": 5, "answers": "x"}}}), encoding="utf-8")

        store = JsonSessionStore(JsonDocument(str(path)))

        assert await store.get(USER) is None

    @pytest.mark.asyncio
    async def test_concurrent_saves_keep_every_session(self, tmp_path):
        path = str(tmp_path / "db.json")
        store = JsonSessionStore(JsonDocument(path))
        users = [f"whatsapp:+5068888{i:04d}" for i in range(20)]

        await asyncio.gather(*(store.upsert(Session(user_id=user)) for user in users))

        reloaded = JsonSessionStore(JsonDocument(path))
        assert set(await reloaded.snapshot()) == set(users)
        assert not list(tmp_path.glob(".db.json.*"))

    @pytest.mark.asyncio
    async def test_delete_session(self, tmp_path):
        store = JsonSessionStore(JsonDocument(str(tmp_path / "db.json")))
        await store.upsert(Session(user_id=USER))

        await store.delete(USER)
        await store.delete(USER)

        assert await store.get(USER) is None
        assert await store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_records_use_camel_case_keys(self, tmp_path):
        path = tmp_path / "db.json"
        store = JsonRecordStore(JsonDocument(str(path)))
        appointment = make_appointment()

        await store.add_appointment(appointment)
        await store.add_report(CaseReport(user_id=USER, kind="asesor", fields={"nombre": "Ana"}))

        saved = json.loads(path.read_text(encoding="utf-8"))["appointments"][0]
        assert saved["id"] == appointment.id
        assert saved["userId"] == USER
        assert saved["branchId"] == "palmares"
        assert "createdAt" in saved

        reloaded = JsonRecordStore(JsonDocument(str(path)))
        assert (await reloaded.list_appointments())[0].branch_id == "palmares"
        assert (await reloaded.list_reports())[0].fields == {"nombre": "Ana"}

    def test_catalog_comes_from_document(self, tmp_path):
        path = tmp_path / "db.json"
        document = JsonDocument(str(path))
        document.data["prices"]["reparacion_minima"] = 15000

        catalog = JsonRecordStore(document).get_catalog()

        assert catalog.prices.reparacion_minima == 15000
        assert catalog.branch_by_id("palmares").name == "MPC Jsala - Palmares"


class TestRecordLookup:

    @pytest.mark.asyncio
    async def test_find_record_is_case_insensitive(self):
        store = InMemoryRecordStore()
        appointment = make_appointment()
        report = CaseReport(user_id=USER, kind="reparacion", estimate=12000)
        await store.add_appointment(appointment)
        await store.add_report(report)

        assert await store.find_record(appointment.id.lower()) == appointment
        assert await store.find_record(f"  {report.id}  ") == report
        assert await store.find_record("ZZZZZZZZ") is None
        assert await store.find_record("") is None


class TestBuildStores:

    def test_memory_when_db_path_is_empty(self, monkeypatch):
        monkeypatch.setenv("DB_PATH", "")
        session_store, record_store = build_stores(Settings())

        assert isinstance(session_store, InMemorySessionStore)
        assert isinstance(record_store, InMemoryRecordStore)

    def test_json_when_db_path_is_set(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DB_PATH", str(tmp_path / "data" / "db.json"))
        session_store, record_store = build_stores(Settings())

        assert isinstance(session_store, JsonSessionStore)
        assert isinstance(record_store, JsonRecordStore)
        assert (tmp_path / "data" / "db.json").exists()
