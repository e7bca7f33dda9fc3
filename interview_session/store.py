from __future__ import annotations  # Interview attempt persistence

import json
import sqlite3
from pathlib import Path
from typing import List, Optional

from storage.sqlite import PathLike, get_conn

from .models import AnswerEntry, InterviewAttempt


class AttemptStore:  # SQLite-backed attempt documents, written back whole
    def __init__(self, path: PathLike) -> None:
        self._path = Path(path)

    def insert(self, attempt: InterviewAttempt) -> None:
        with get_conn(self._path) as conn:
            conn.execute(
                """
                INSERT INTO interview_attempts (
                    attempt_id, account_id, kind, difficulty, tech_focus_json,
                    questions_json, answers_json, overall_score, overall_feedback,
                    summary_weak_areas_json, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    attempt.attempt_id,
                    attempt.account_id,
                    attempt.kind,
                    attempt.difficulty,
                    json.dumps(attempt.tech_focus),
                    json.dumps([q.model_dump() for q in attempt.questions]),
                    _answers_json(attempt),
                    attempt.overall_score,
                    attempt.overall_feedback,
                    json.dumps(attempt.summary_weak_areas),
                    attempt.created_at,
                    attempt.updated_at,
                ),
            )

    def save(self, attempt: InterviewAttempt) -> None:
        """Overwrite the mutable part of the document; questions never change."""

        with get_conn(self._path) as conn:
            conn.execute(
                """
                UPDATE interview_attempts
                SET answers_json = ?,
                    overall_score = ?,
                    overall_feedback = ?,
                    summary_weak_areas_json = ?,
                    updated_at = ?
                WHERE attempt_id = ?
                """,
                (
                    _answers_json(attempt),
                    attempt.overall_score,
                    attempt.overall_feedback,
                    json.dumps(attempt.summary_weak_areas),
                    attempt.updated_at,
                    attempt.attempt_id,
                ),
            )

    def get(self, attempt_id: str) -> Optional[InterviewAttempt]:
        with get_conn(self._path) as conn:
            row = conn.execute(
                "SELECT * FROM interview_attempts WHERE attempt_id = ?",
                (attempt_id,),
            ).fetchone()
        return None if row is None else _to_attempt(row)

    def list_for_account(self, account_id: str) -> List[InterviewAttempt]:
        """All attempts of one account, newest first."""

        with get_conn(self._path) as conn:
            rows = conn.execute(
                """
                SELECT * FROM interview_attempts
                WHERE account_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (account_id,),
            ).fetchall()
        return [_to_attempt(row) for row in rows]


def _answers_json(attempt: InterviewAttempt) -> str:
    return json.dumps([entry.model_dump() for entry in attempt.ordered_answers()])


def _to_attempt(row: sqlite3.Row) -> InterviewAttempt:
    answers = [AnswerEntry.model_validate(item) for item in json.loads(row["answers_json"])]
    return InterviewAttempt(
        attempt_id=row["attempt_id"],
        account_id=row["account_id"],
        kind=row["kind"],
        difficulty=row["difficulty"],
        tech_focus=json.loads(row["tech_focus_json"]),
        questions=json.loads(row["questions_json"]),
        answers={entry.question_index: entry for entry in answers},
        overall_score=row["overall_score"],
        overall_feedback=row["overall_feedback"],
        summary_weak_areas=json.loads(row["summary_weak_areas_json"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


__all__ = ["AttemptStore"]
