"""SQLite schema migrations."""
from __future__ import annotations

import os
import sqlite3
from typing import Iterable

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS accounts (
  account_id TEXT PRIMARY KEY,
  name TEXT NOT NULL,
  email TEXT NOT NULL UNIQUE,
  password_hash TEXT NOT NULL,
  role TEXT NOT NULL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS revoked_tokens (
  jti TEXT PRIMARY KEY,
  account_id TEXT NOT NULL,
  expires_at INTEGER NOT NULL,
  revoked_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS interview_attempts (
  attempt_id TEXT PRIMARY KEY,
  account_id TEXT NOT NULL,
  kind TEXT NOT NULL,
  difficulty TEXT NOT NULL,
  tech_focus_json TEXT NOT NULL,
  questions_json TEXT NOT NULL,
  answers_json TEXT NOT NULL,
  overall_score REAL,
  overall_feedback TEXT,
  summary_weak_areas_json TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL,
  FOREIGN KEY(account_id) REFERENCES accounts(account_id)
);
""",
    """
CREATE INDEX IF NOT EXISTS idx_attempts_account
  ON interview_attempts(account_id, created_at);
""",
    """
CREATE TABLE IF NOT EXISTS notes (
  note_id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  subject TEXT NOT NULL,
  branch TEXT NOT NULL,
  semester TEXT NOT NULL,
  file_url TEXT NOT NULL,
  uploaded_by TEXT NOT NULL,
  approved INTEGER NOT NULL DEFAULT 0,
  downloads INTEGER NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL,
  FOREIGN KEY(uploaded_by) REFERENCES accounts(account_id)
);
""",
    """
CREATE TABLE IF NOT EXISTS note_ratings (
  note_id TEXT NOT NULL,
  rater_id TEXT NOT NULL,
  value INTEGER NOT NULL,
  PRIMARY KEY (note_id, rater_id),
  FOREIGN KEY(note_id) REFERENCES notes(note_id) ON DELETE CASCADE
);
""",
    """
CREATE TABLE IF NOT EXISTS account_bookmarks (
  account_id TEXT NOT NULL,
  note_id TEXT NOT NULL,
  created_at TEXT NOT NULL,
  PRIMARY KEY (account_id, note_id),
  FOREIGN KEY(account_id) REFERENCES accounts(account_id)
);
""",
]


def migrate(db_path: str = "data/campusprep.db") -> None:
    """Apply schema migrations to the SQLite database."""

    directory = os.path.dirname(str(db_path)) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    migrate()
