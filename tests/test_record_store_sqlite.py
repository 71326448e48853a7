import pytest

from src.storage.sqlite_record_store import SQLiteRecordStore


def test_sqlite_record_store_seeds_missing_collection(tmp_path):
    db = tmp_path / "test.db"
    store = SQLiteRecordStore(str(db), seed={"templates": [{"id": "t1", "name": "T1", "body": "{{x}}"}]})

    assert store.read_all("templates") == [{"id": "t1", "name": "T1", "body": "{{x}}"}]
    assert store.read_all("users") == []


def test_sqlite_record_store_roundtrip_survives_reopen(tmp_path):
    db = tmp_path / "test.db"
    store = SQLiteRecordStore(str(db))

    store.write_all("users", [{"id": "u1", "email": "a@example.com", "templates": []}])

    reopened = SQLiteRecordStore(str(db), seed={"users": [{"id": "seed"}]})
    # an existing collection is never re-seeded
    assert reopened.read_all("users") == [{"id": "u1", "email": "a@example.com", "templates": []}]


def test_sqlite_record_store_write_replaces_collection(tmp_path):
    db = tmp_path / "test.db"
    store = SQLiteRecordStore(str(db))

    store.write_all("users", [{"id": "u1"}, {"id": "u2"}])
    store.write_all("users", [{"id": "u2"}])

    assert store.read_all("users") == [{"id": "u2"}]


def test_sqlite_record_store_creates_parent_directory(tmp_path):
    db = tmp_path / "nested" / "dir" / "test.db"
    store = SQLiteRecordStore(str(db))

    store.write_all("templates", [])
    assert db.exists()


def test_seed_is_not_shared_with_callers(tmp_path):
    seed = {"templates": [{"id": "t1"}]}
    store = SQLiteRecordStore(str(tmp_path / "test.db"), seed=seed)

    records = store.read_all("templates")
    records[0]["id"] = "mutated"

    assert seed["templates"][0]["id"] == "t1"
    assert store.read_all("templates") == [{"id": "t1"}]
