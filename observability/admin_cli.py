"""Lightweight CLI helpers for inspecting interview attempts and the notes queue."""
from __future__ import annotations

import argparse
import json
from typing import List, Optional

from accounts import RevokedTokenStore
from config import load_settings
from storage.sqlite import get_conn


def tail_attempts(db_path: str, limit: int = 20) -> List[str]:
    with get_conn(db_path) as conn:
        rows = conn.execute(
            """
            SELECT created_at, attempt_id, account_id, kind, difficulty, answers_json, overall_score
            FROM interview_attempts
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
    lines = []
    for row in rows:
        answered = len(json.loads(row["answers_json"]))
        score = "-" if row["overall_score"] is None else f"{row['overall_score']:g}"
        lines.append(
            f"[{row['created_at']}] {row['attempt_id']}/{row['account_id']} "
            f"{row['kind']}:{row['difficulty']} answered={answered}/5 score={score}"
        )
    return lines


def pending_notes(db_path: str) -> List[str]:
    with get_conn(db_path) as conn:
        rows = conn.execute(
            """
            SELECT created_at, note_id, uploaded_by, branch, semester, title
            FROM notes
            WHERE approved = 0
            ORDER BY created_at ASC
            """
        ).fetchall()
    return [
        f"[{row['created_at']}] {row['note_id']} by {row['uploaded_by']} {row['branch']}/{row['semester']} {row['title']}"
        for row in rows
    ]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail-attempts", type=int, help="Show the latest interview attempts")
    parser.add_argument("--pending-notes", action="store_true", help="List notes awaiting approval")
    parser.add_argument("--purge-revoked", action="store_true", help="Drop expired revoked refresh tokens")
    args = parser.parse_args(argv)

    db_path = load_settings().DB_PATH
    if args.tail_attempts:
        for line in tail_attempts(db_path, args.tail_attempts):
            print(line)
    if args.pending_notes:
        for line in pending_notes(db_path):
            print(line)
    if args.purge_revoked:
        print(f"purged={RevokedTokenStore(db_path).purge_expired()}")


if __name__ == "__main__":
    main()
