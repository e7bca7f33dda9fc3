from __future__ import annotations  # Account and refresh-token storage helpers

import sqlite3
import time
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from errors import ConflictError
from storage.sqlite import PathLike, get_conn, utcnow

from .models import AccountRecord


class AccountStore:  # SQLite-backed account storage
    def __init__(self, path: PathLike) -> None:
        self._path = Path(path)

    def create(self, *, name: str, email: str, password_hash: str, role: str) -> AccountRecord:
        """Insert an account; the UNIQUE email column backs up the caller's lookup."""

        record = AccountRecord(
            account_id=uuid4().hex,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=utcnow(),
        )
        try:
            with get_conn(self._path) as conn:
                conn.execute(
                    """
                    INSERT INTO accounts (account_id, name, email, password_hash, role, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.account_id,
                        record.name,
                        record.email,
                        record.password_hash,
                        record.role,
                        record.created_at,
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise ConflictError("Email is already registered.") from exc
        return record

    def get(self, account_id: str) -> Optional[AccountRecord]:
        with get_conn(self._path) as conn:
            row = conn.execute(
                "SELECT * FROM accounts WHERE account_id = ?",
                (account_id,),
            ).fetchone()
        return _to_record(row)

    def find_by_email(self, email: str) -> Optional[AccountRecord]:
        with get_conn(self._path) as conn:
            row = conn.execute(
                "SELECT * FROM accounts WHERE email = ?",
                (email,),
            ).fetchone()
        return _to_record(row)

    def toggle_bookmark(self, account_id: str, note_id: str) -> bool:
        """Flip the bookmark and return whether the note is now bookmarked."""

        with get_conn(self._path) as conn:
            deleted = conn.execute(
                "DELETE FROM account_bookmarks WHERE account_id = ? AND note_id = ?",
                (account_id, note_id),
            ).rowcount
            if deleted:
                return False
            conn.execute(
                "INSERT INTO account_bookmarks (account_id, note_id, created_at) VALUES (?, ?, ?)",
                (account_id, note_id, utcnow()),
            )
            return True

    def list_bookmarks(self, account_id: str) -> List[str]:
        with get_conn(self._path) as conn:
            rows = conn.execute(
                """
                SELECT note_id FROM account_bookmarks
                WHERE account_id = ?
                ORDER BY created_at ASC
                """,
                (account_id,),
            ).fetchall()
        return [row["note_id"] for row in rows]


class RevokedTokenStore:  # Ledger of rotated or logged-out refresh tokens
    def __init__(self, path: PathLike) -> None:
        self._path = Path(path)

    def revoke(self, jti: str, *, account_id: str, expires_at: int) -> None:
        with get_conn(self._path) as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO revoked_tokens (jti, account_id, expires_at, revoked_at)
                VALUES (?, ?, ?, ?)
                """,
                (jti, account_id, int(expires_at), utcnow()),
            )

    def is_revoked(self, jti: str) -> bool:
        with get_conn(self._path) as conn:
            row = conn.execute("SELECT 1 FROM revoked_tokens WHERE jti = ?", (jti,)).fetchone()
        return row is not None

    def purge_expired(self, now: Optional[int] = None) -> int:
        """Drop entries whose token would be rejected as expired anyway."""

        cutoff = int(now if now is not None else time.time())
        with get_conn(self._path) as conn:
            return conn.execute("DELETE FROM revoked_tokens WHERE expires_at < ?", (cutoff,)).rowcount


def _to_record(row: Optional[sqlite3.Row]) -> Optional[AccountRecord]:
    if row is None:
        return None
    return AccountRecord(
        account_id=row["account_id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=row["role"],
        created_at=row["created_at"],
    )


__all__ = ["AccountStore", "RevokedTokenStore"]
