"""Tests for the SQLite migration and store helpers."""
from __future__ import annotations

import os
import sqlite3

import pytest

from accounts import AccountStore, RevokedTokenStore
from errors import ConflictError
from storage.migrate import migrate
from storage.sqlite import get_conn, utcnow


def test_migrate_creates_tables_and_is_idempotent(tmp_path):
    db_path = str(tmp_path / "nested" / "app.db")
    migrate(db_path)
    migrate(db_path)
    assert os.path.exists(db_path)

    with sqlite3.connect(db_path) as conn:
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {
        "accounts",
        "revoked_tokens",
        "interview_attempts",
        "notes",
        "note_ratings",
        "account_bookmarks",
    } <= names


def test_get_conn_rolls_back_on_error(db_path):
    with pytest.raises(RuntimeError):
        with get_conn(db_path) as conn:
            conn.execute(
                "INSERT INTO accounts (account_id, name, email, password_hash, role, created_at) "
                "VALUES ('a1', 'A', 'a@x.io', 'h', 'student', ?)",
                (utcnow(),),
            )
            raise RuntimeError("boom")

    with get_conn(db_path) as conn:
        assert conn.execute("SELECT COUNT(*) FROM accounts").fetchone()[0] == 0


def test_account_store_unique_email_backstop(db_path):
    store = AccountStore(db_path)
    created = store.create(name="Ann", email="ann@x.io", password_hash="h", role="student")
    assert store.get(created.account_id) == created
    assert store.find_by_email("ann@x.io") == created
    assert store.get("missing") is None

    with pytest.raises(ConflictError):
        store.create(name="Ann 2", email="ann@x.io", password_hash="h", role="student")


def test_revoked_tokens_ledger_and_purge(db_path):
    ledger = RevokedTokenStore(db_path)
    ledger.revoke("old", account_id="a1", expires_at=100)
    ledger.revoke("new", account_id="a1", expires_at=10_000)
    ledger.revoke("new", account_id="a1", expires_at=10_000)

    assert ledger.is_revoked("old") and ledger.is_revoked("new")
    assert not ledger.is_revoked("other")

    assert ledger.purge_expired(now=5_000) == 1
    assert not ledger.is_revoked("old")
    assert ledger.is_revoked("new")


def test_utcnow_sorts_chronologically():
    first, second = utcnow(), utcnow()
    assert first <= second
    assert first.endswith("+00:00")
