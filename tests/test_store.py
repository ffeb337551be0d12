from __future__ import annotations

import sqlite3

import pytest

from db import schema
from db.connection import get_connection
from db.store import SqliteSearchStore
from models import ContactResult


@pytest.fixture
def sqlite_store(tmp_path):
    conn = get_connection(str(tmp_path / "contacts.db"))
    schema.bootstrap(conn)
    yield SqliteSearchStore(conn)
    conn.close()


def _result(email, origin="regex"):
    return ContactResult(
        business_name="Plomberie Dupont",
        email=email,
        website="plomberie-dupont.fr",
        city="Lyon",
        email_source="plomberie-dupont.fr",
        email_origin=origin,
    )


def test_bootstrap_is_idempotent(tmp_path):
    conn = get_connection(str(tmp_path / "contacts.db"))
    schema.bootstrap(conn)
    schema.bootstrap(conn)
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"searches", "contact_results"} <= tables
    conn.close()


def test_new_search_is_pending(sqlite_store):
    search = sqlite_store.create_search("Rhône", "garage")
    assert search.status == "pending"
    assert search.total_results == 0
    assert search.created_at and search.updated_at


def test_update_only_touches_given_fields(sqlite_store):
    search = sqlite_store.create_search("Rhône", "garage")
    sqlite_store.update_search(search.id, status="processing")
    sqlite_store.update_search(search.id, status="failed", error_message="boom")

    final = sqlite_store.get_search(search.id)
    assert (final.status, final.total_results, final.error_message) == ("failed", 0, "boom")


def test_unknown_status_is_rejected(sqlite_store):
    search = sqlite_store.create_search("Rhône", "garage")
    with pytest.raises(sqlite3.IntegrityError):
        sqlite_store.update_search(search.id, status="paused")


def test_results_are_listed_in_insertion_order(sqlite_store):
    search = sqlite_store.create_search("Lyon", "plombier")
    other = sqlite_store.create_search("Paris", "plombier")
    sqlite_store.add_contact_result(search.id, _result("b@plomberie-dupont.fr"))
    sqlite_store.add_contact_result(other.id, _result("x@plomberie-dupont.fr"))
    sqlite_store.add_contact_result(search.id, _result("contact@plomberie-dupont.fr", "placeholder"))

    results = sqlite_store.list_contact_results(search.id)

    assert [(r.email, r.email_origin) for r in results] == [
        ("b@plomberie-dupont.fr", "regex"),
        ("contact@plomberie-dupont.fr", "placeholder"),
    ]
    assert results[0].email_source == "plomberie-dupont.fr"


def test_results_require_an_existing_search(sqlite_store):
    with pytest.raises(sqlite3.IntegrityError):
        sqlite_store.add_contact_result(12345, _result("a@b.fr"))


def test_history_lists_newest_first(sqlite_store):
    ids = [sqlite_store.create_search("Lyon", f"secteur {i}").id for i in range(3)]
    assert [s.id for s in sqlite_store.list_searches(limit=2)] == ids[::-1][:2]


def test_connection_creates_database_directory(tmp_path):
    db_path = tmp_path / "data" / "nested" / "contacts.db"
    conn = get_connection(str(db_path))
    try:
        assert db_path.parent.is_dir()
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert conn.execute("PRAGMA journal_mode").fetchone()[0].lower() == "wal"
    finally:
        conn.close()
