"""Tests for the mock query engine (pseudo-SQL over the key-value store)."""
import asyncio

import pytest

from mwangaza.core.exceptions import MalformedQueryError
from mwangaza.db import query as mock_db
from mwangaza.db.query import ACADEMIC_RECORDS_KEY, ADMISSION_SEQUENCES_KEY, DB_KEYS, STAFF_KEY


def run_query(sql, params=None):
    return asyncio.run(mock_db.query(sql, params))


def test_connection_creates_empty_tables(store):
    for key in DB_KEYS.values():
        store.remove(key)

    assert asyncio.run(mock_db.test_connection()) is True
    for key in DB_KEYS.values():
        assert store.get(key) == []


def test_connection_keeps_existing_rows(store):
    store.set(DB_KEYS["clients"], [{"id": "1"}])
    assert asyncio.run(mock_db.test_connection()) is True
    assert store.get(DB_KEYS["clients"]) == [{"id": "1"}]


def test_reset_then_connect_gives_three_empty_tables(store):
    store.set(DB_KEYS["clients"], [{"id": "1"}])
    store.set(DB_KEYS["home_visits"], [{"id": "hv1", "clientId": "1"}])
    store.set(ACADEMIC_RECORDS_KEY, [{"id": "a1"}])
    store.set(ADMISSION_SEQUENCES_KEY, {"2024": 3})
    store.set(STAFF_KEY, [{"id": "s1"}])

    mock_db.reset_database()
    assert asyncio.run(mock_db.test_connection()) is True

    assert [store.get(key) for key in DB_KEYS.values()] == [[], [], []]
    assert not store.contains(ACADEMIC_RECORDS_KEY)
    assert not store.contains(ADMISSION_SEQUENCES_KEY)
    # Staff accounts survive a reset
    assert store.get(STAFF_KEY) == [{"id": "s1"}]


def test_select_all_rows(store):
    store.set(DB_KEYS["clients"], [{"id": "1"}, {"id": "2"}])
    assert run_query("SELECT * FROM clients") == [{"id": "1"}, {"id": "2"}]


def test_select_where_maps_snake_case_column(store):
    store.set(DB_KEYS["parents"], [
        {"id": "p1", "clientId": "1"},
        {"id": "p2", "clientId": "2"},
        {"id": "p3", "clientId": "1"},
    ])
    rows = run_query("SELECT * FROM parents WHERE client_id = ?", ["1"])
    assert [row["id"] for row in rows] == ["p1", "p3"]


def test_select_where_matches_legacy_rows(store):
    store.set(DB_KEYS["home_visits"], [
        {"id": "hv1", "client_id": "1"},
        {"id": "hv2", "clientId": "1"},
        {"id": "hv3", "clientId": "2"},
    ])
    rows = run_query("SELECT * FROM home_visits WHERE client_id = ?", ["1"])
    assert [row["id"] for row in rows] == ["hv1", "hv2"]


def test_select_where_without_params_returns_everything(store):
    store.set(DB_KEYS["clients"], [{"id": "1"}, {"id": "2"}])
    assert len(run_query("SELECT * FROM clients WHERE id = ?")) == 2


def test_select_where_unmapped_column(store):
    store.set(DB_KEYS["clients"], [{"id": "1", "gender": "male"}, {"id": "2", "gender": "female"}])
    rows = run_query("SELECT * FROM clients WHERE gender = ?", ["female"])
    assert rows == [{"id": "2", "gender": "female"}]


@pytest.mark.parametrize("sql, expected", [
    ("INSERT INTO clients (id) VALUES (?)", {"affectedRows": 1, "insertId": "mock-id"}),
    ("UPDATE clients SET notes = ? WHERE id = ?", {"affectedRows": 1}),
    ("DELETE FROM home_visits WHERE id = ?", {"affectedRows": 1}),
])
def test_write_verbs_are_acknowledged_without_writing(store, sql, expected):
    store.set(DB_KEYS["clients"], [{"id": "1", "notes": "old"}])
    store.set(DB_KEYS["home_visits"], [{"id": "hv1"}])

    assert run_query(sql, ["x", "1"]) == expected
    assert store.get(DB_KEYS["clients"]) == [{"id": "1", "notes": "old"}]
    assert store.get(DB_KEYS["home_visits"]) == [{"id": "hv1"}]


@pytest.mark.parametrize("sql", [
    "SELECT * FROM academic_records",
    "INSERT INTO staff (id) VALUES (?)",
    "UPDATE subjects SET name = ?",
    "DELETE FROM nowhere",
    "SELECT 1",
])
def test_unknown_table_raises(sql):
    with pytest.raises(MalformedQueryError):
        run_query(sql)


@pytest.mark.parametrize("sql", ["DROP TABLE clients", "MERGE INTO clients", ""])
def test_unknown_verb_raises(sql):
    with pytest.raises(MalformedQueryError):
        run_query(sql)


def test_verb_is_case_insensitive(store):
    store.set(DB_KEYS["clients"], [{"id": "1"}])
    assert run_query("  select * from clients") == [{"id": "1"}]


def test_latency_comes_from_settings(monkeypatch):
    from mwangaza.core.config import settings

    monkeypatch.setattr(settings, "QUERY_LATENCY_MS", 250)
    assert mock_db.get_query_engine().latency == 0.25
