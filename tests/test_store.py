from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from mixlog.models.enums import ColorType, MixType
from mixlog.models.mix import MixRecord
from mixlog.schemas.mix import MixInput
from mixlog.services.store import MixStore, RecordNotFound, StoreError
from mixlog.services.validation import normalize

def test_create_assigns_identity(sqlite_session, interlock_input):
    store = MixStore(sqlite_session, "u1")
    rec = store.create(normalize(interlock_input))
    assert rec.id
    assert rec.created_by == "u1"
    assert rec.timestamp == rec.last_modified

def test_round_trip_preserves_measurements(sqlite_session, boards_input):
    store = MixStore(sqlite_session, "u1")
    fields = normalize(boards_input.model_copy(update={"cement": 1234.56, "color_quantity": 9999.99, "color_type": ""}))
    store.create(fields)
    sqlite_session.commit()
    sqlite_session.expire_all()

    page = store.list()
    assert page.total_count == 1
    assert page.records[0].measurements == fields.measurements
    assert page.records[0].measurements.color_type == ColorType.NoColor

def test_stored_document_shape(sqlite_session, boards_input):
    rec = MixStore(sqlite_session, "u1").create(normalize(boards_input))
    row = sqlite_session.get(MixRecord, rec.id)
    assert row.measurements["colorType"] == "White"
    assert row.measurements["colorQuantity"] == 30
    assert row.measurements["birta"] == 50
    assert row.measurements["products"][0] == {"type": "Tiir", "quantity": 200}

def test_list_newest_first_and_paginated(sqlite_session, interlock_input):
    store = MixStore(sqlite_session, "u1")
    ids = [store.create(normalize(interlock_input)).id for _ in range(5)]
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i, rid in enumerate(ids):
        sqlite_session.get(MixRecord, rid).timestamp = base + timedelta(hours=i)
    sqlite_session.flush()

    first = store.list(page=1, page_size=2)
    assert first.total_count == 5
    assert first.total_pages == 3
    assert [r.id for r in first.records] == [ids[4], ids[3]]
    last = store.list(page=3, page_size=2)
    assert [r.id for r in last.records] == [ids[0]]

def test_list_filters_by_mix_type(sqlite_session, interlock_input, boards_input):
    store = MixStore(sqlite_session, "u1")
    store.create(normalize(interlock_input))
    store.create(normalize(boards_input))
    page = store.list(mix_type=MixType.BoardsTiir)
    assert page.total_count == 1
    assert page.records[0].mix_type == MixType.BoardsTiir

def test_list_empty(sqlite_session):
    page = MixStore(sqlite_session, "u1").list()
    assert page.records == []
    assert page.total_count == 0
    assert page.total_pages == 0

def test_list_rejects_bad_paging(sqlite_session):
    with pytest.raises(ValueError):
        MixStore(sqlite_session, "u1").list(page=0)

def test_owner_scoping(sqlite_session, interlock_input):
    rec = MixStore(sqlite_session, "u1").create(normalize(interlock_input))
    other = MixStore(sqlite_session, "u2")
    assert other.list().total_count == 0
    with pytest.raises(RecordNotFound):
        other.get(rec.id)
    with pytest.raises(RecordNotFound):
        other.delete(rec.id)

def test_update_replaces_block(sqlite_session, interlock_input, boards_input):
    store = MixStore(sqlite_session, "u1")
    rec = store.create(normalize(interlock_input))
    updated = store.update(rec.id, normalize(boards_input))
    assert updated.id == rec.id
    assert updated.timestamp == rec.timestamp
    assert updated.mix_type == MixType.BoardsTiir
    assert updated.measurements.birta == 50
    assert [p.type for p in updated.measurements.products] == ["Tiir", "Boards"]
    assert updated.last_modified >= rec.last_modified

def test_update_missing(sqlite_session, interlock_input):
    with pytest.raises(RecordNotFound):
        MixStore(sqlite_session, "u1").update("nope", normalize(interlock_input))

def test_delete(sqlite_session, interlock_input):
    store = MixStore(sqlite_session, "u1")
    rec = store.create(normalize(interlock_input))
    assert store.delete(rec.id) is True
    assert store.list().total_count == 0

def test_database_errors_become_store_error(sqlite_session, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("select", {}, Exception("db down"))

    monkeypatch.setattr(sqlite_session, "execute", boom)
    with pytest.raises(StoreError):
        MixStore(sqlite_session, "u1").list()

def test_timestamps_reload_timezone_aware(sqlite_session, interlock_input):
    store = MixStore(sqlite_session, "u1")
    rec = store.create(normalize(interlock_input))
    sqlite_session.commit()
    sqlite_session.expire_all()

    reloaded = store.get(rec.id)
    assert reloaded.timestamp.tzinfo is not None
    assert reloaded.timestamp == rec.timestamp
    assert reloaded.last_modified == rec.last_modified

def test_malformed_stored_record_becomes_store_error(sqlite_session):
    now = datetime.now(timezone.utc)
    row = MixRecord(
        mix_type=MixType.Interlock,
        measurements={"cement": 1, "colorType": "Green", "colorQuantity": 0, "products": []},
        created_by="u1",
        timestamp=now,
        last_modified=now,
    )
    sqlite_session.add(row)
    sqlite_session.flush()

    store = MixStore(sqlite_session, "u1")
    with pytest.raises(StoreError):
        store.list()
    with pytest.raises(StoreError):
        store.get(row.id)
