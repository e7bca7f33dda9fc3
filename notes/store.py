from __future__ import annotations  # Note storage helpers

import sqlite3
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from storage.sqlite import PathLike, get_conn, utcnow

from .models import NoteRecord


class NoteStore:  # SQLite-backed note storage
    def __init__(self, path: PathLike) -> None:
        self._path = Path(path)

    def create(self, record: NoteRecord) -> NoteRecord:
        with get_conn(self._path) as conn:
            conn.execute(
                """
                INSERT INTO notes (note_id, title, subject, branch, semester, file_url,
                                   uploaded_by, approved, downloads, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.note_id,
                    record.title,
                    record.subject,
                    record.branch,
                    record.semester,
                    record.file_url,
                    record.uploaded_by,
                    int(record.approved),
                    record.downloads,
                    record.created_at,
                    record.updated_at,
                ),
            )
        return record

    def get(self, note_id: str) -> Optional[NoteRecord]:
        with get_conn(self._path) as conn:
            row = conn.execute("SELECT * FROM notes WHERE note_id = ?", (note_id,)).fetchone()
            if row is None:
                return None
            return _to_record(row, _ratings(conn, [note_id]).get(note_id, {}))

    def get_many(self, note_ids: Sequence[str]) -> List[NoteRecord]:
        """Notes for the given ids in the given order, skipping ids that no longer exist."""

        if not note_ids:
            return []
        placeholders = ", ".join("?" for _ in note_ids)
        with get_conn(self._path) as conn:
            rows = conn.execute(
                f"SELECT * FROM notes WHERE note_id IN ({placeholders})",
                tuple(note_ids),
            ).fetchall()
            ratings = _ratings(conn, [row["note_id"] for row in rows])
        by_id = {row["note_id"]: _to_record(row, ratings.get(row["note_id"], {})) for row in rows}
        return [by_id[note_id] for note_id in note_ids if note_id in by_id]

    def search(
        self,
        *,
        approved: bool,
        branch: Optional[str] = None,
        semester: Optional[str] = None,
        subject: Optional[str] = None,
        query: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[NoteRecord]:
        clauses = ["approved = ?"]
        params: List[object] = [int(approved)]
        for column, value in (("branch", branch), ("semester", semester), ("subject", subject)):
            if value:
                clauses.append(f"{column} = ?")
                params.append(value)
        if query:
            clauses.append("(title LIKE ? ESCAPE '\\' OR subject LIKE ? ESCAPE '\\')")
            pattern = f"%{_escape_like(query)}%"
            params.extend([pattern, pattern])
        order = "DESC" if newest_first else "ASC"
        with get_conn(self._path) as conn:
            rows = conn.execute(
                f"SELECT * FROM notes WHERE {' AND '.join(clauses)} "
                f"ORDER BY created_at {order}, rowid {order}",
                tuple(params),
            ).fetchall()
            ratings = _ratings(conn, [row["note_id"] for row in rows])
        return [_to_record(row, ratings.get(row["note_id"], {})) for row in rows]

    def set_approved(self, note_id: str, approved: bool) -> None:
        with get_conn(self._path) as conn:
            conn.execute(
                "UPDATE notes SET approved = ?, updated_at = ? WHERE note_id = ?",
                (int(approved), utcnow(), note_id),
            )

    def increment_downloads(self, note_id: str) -> None:
        with get_conn(self._path) as conn:
            conn.execute(
                "UPDATE notes SET downloads = downloads + 1 WHERE note_id = ?",
                (note_id,),
            )

    def upsert_rating(self, note_id: str, rater_id: str, value: int) -> None:
        with get_conn(self._path) as conn:
            conn.execute(
                """
                INSERT INTO note_ratings (note_id, rater_id, value) VALUES (?, ?, ?)
                ON CONFLICT(note_id, rater_id) DO UPDATE SET value = excluded.value
                """,
                (note_id, rater_id, value),
            )

    def delete(self, note_id: str) -> bool:
        with get_conn(self._path) as conn:
            conn.execute("DELETE FROM account_bookmarks WHERE note_id = ?", (note_id,))
            conn.execute("DELETE FROM note_ratings WHERE note_id = ?", (note_id,))
            return conn.execute("DELETE FROM notes WHERE note_id = ?", (note_id,)).rowcount > 0


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _ratings(conn: sqlite3.Connection, note_ids: Sequence[str]) -> Dict[str, Dict[str, int]]:
    if not note_ids:
        return {}
    placeholders = ", ".join("?" for _ in note_ids)
    rows = conn.execute(
        f"SELECT note_id, rater_id, value FROM note_ratings WHERE note_id IN ({placeholders})",
        tuple(note_ids),
    ).fetchall()
    grouped: Dict[str, Dict[str, int]] = {}
    for row in rows:
        grouped.setdefault(row["note_id"], {})[row["rater_id"]] = int(row["value"])
    return grouped


def _to_record(row: sqlite3.Row, ratings: Dict[str, int]) -> NoteRecord:
    return NoteRecord(
        note_id=row["note_id"],
        title=row["title"],
        subject=row["subject"],
        branch=row["branch"],
        semester=row["semester"],
        file_url=row["file_url"],
        uploaded_by=row["uploaded_by"],
        approved=bool(row["approved"]),
        downloads=int(row["downloads"]),
        ratings=ratings,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


__all__ = ["NoteStore"]
