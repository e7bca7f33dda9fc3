"""Mock-interview session lifecycle: start, answer, complete.

An attempt moves ``created -> in_progress -> complete``. The state is derived
from the answer set rather than stored: once every question index holds an
answer the summary is computed, and it is computed only once.
"""
from __future__ import annotations

import re
from typing import Any, List, Sequence
from uuid import uuid4

from errors import NotFoundError, ValidationError
from observability import log_event
from question_provider import (
    DIFFICULTY_LEVELS,
    INTERVIEW_KINDS,
    QUESTION_COUNT,
    QuestionAnswerPair,
    QuestionProvider,
)
from storage.sqlite import utcnow

from .models import AnswerEntry, AttemptView, InterviewAttempt, StartResult, SubmitResult
from .store import AttemptStore


_INTEGER_TEXT = re.compile(r"^[+-]?\d+$")
NOT_FOUND = "Interview not found."


def normalize_tech_focus(raw: Any) -> List[str]:
    """Trim, drop empties and case-insensitive duplicates, keep first-seen order."""

    if not isinstance(raw, (list, tuple)):
        return []
    seen: set[str] = set()
    tags: List[str] = []
    for item in raw:
        if item is None:
            continue
        tag = str(item).strip()
        key = tag.lower()
        if not tag or key in seen:
            continue
        seen.add(key)
        tags.append(tag)
    return tags


def parse_question_index(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("question_index must be an integer between 0 and 4.")
    if isinstance(value, int):
        index = value
    elif isinstance(value, float) and value.is_integer():
        index = int(value)
    elif isinstance(value, str) and _INTEGER_TEXT.match(value.strip()):
        index = int(value.strip())
    else:
        raise ValidationError("question_index must be an integer between 0 and 4.")
    if not 0 <= index < QUESTION_COUNT:
        raise ValidationError("question_index must be an integer between 0 and 4.")
    return index


class InterviewSessionService:
    def __init__(self, store: AttemptStore, provider: QuestionProvider) -> None:
        self._store = store
        self._provider = provider

    def start(self, account_id: str, kind: Any, difficulty: Any, tech_focus: Any = None) -> StartResult:
        if kind not in INTERVIEW_KINDS:
            raise ValidationError(f"kind must be one of: {', '.join(INTERVIEW_KINDS)}")
        if difficulty not in DIFFICULTY_LEVELS:
            raise ValidationError(f"difficulty must be one of: {', '.join(DIFFICULTY_LEVELS)}")
        focus = normalize_tech_focus(tech_focus)

        questions = self._provider.generate_questions(kind, difficulty, focus)
        now = utcnow()
        attempt = InterviewAttempt(
            attempt_id=uuid4().hex,
            account_id=account_id,
            kind=kind,
            difficulty=difficulty,
            tech_focus=focus,
            questions=questions,
            created_at=now,
            updated_at=now,
        )
        self._store.insert(attempt)
        log_event("interview.start", account_id, attempt=attempt.attempt_id, status=attempt.status)
        return StartResult(
            attempt_id=attempt.attempt_id,
            question_index=0,
            total_questions=attempt.total_questions,
            question=attempt.questions[0],
        )

    def submit_answer(self, attempt_id: str, requester_id: str, question_index: Any, answer_text: Any) -> SubmitResult:
        index = parse_question_index(question_index)
        if not isinstance(answer_text, str) or not answer_text.strip():
            raise ValidationError("answer text is required.")
        text = answer_text.strip()

        attempt = self._owned(attempt_id, requester_id)
        if index >= attempt.total_questions:
            raise ValidationError("Invalid question index.")
        question = attempt.questions[index]

        evaluation = self._provider.evaluate_answer(
            attempt.kind,
            attempt.difficulty,
            attempt.tech_focus,
            question.prompt,
            text,
        )
        entry = AnswerEntry(
            question_index=index,
            text=text,
            score=evaluation.score,
            correctness=evaluation.correctness,
            clarity=evaluation.clarity,
            depth=evaluation.depth,
            communication=evaluation.communication,
            feedback=evaluation.feedback,
            weak_areas=list(evaluation.weak_areas),
        )
        replaced = index in attempt.answers
        attempt.answers[index] = entry

        completed_now = False
        if attempt.all_answered and attempt.overall_score is None:
            self._complete(attempt)
            completed_now = True
        attempt.updated_at = utcnow()
        self._store.save(attempt)

        log_event(
            "interview.answer",
            requester_id,
            attempt=attempt.attempt_id,
            index=index,
            score=entry.score,
            outcome="replaced" if replaced else "recorded",
        )
        if completed_now:
            log_event(
                "interview.complete",
                requester_id,
                attempt=attempt.attempt_id,
                score=attempt.overall_score,
            )

        is_complete = attempt.status == "complete"
        next_index = None if is_complete else attempt.next_unanswered(index)
        return SubmitResult(
            question_index=index,
            question=question,
            answer=entry,
            next_question=attempt.questions[next_index] if next_index is not None else None,
            next_index=next_index,
            is_complete=is_complete,
            final_score=attempt.overall_score if is_complete else None,
            final_feedback=attempt.overall_feedback if is_complete else None,
        )

    def get_attempt(self, attempt_id: str, requester_id: str) -> AttemptView:
        return AttemptView.of(self._owned(attempt_id, requester_id))

    def list_attempts(self, account_id: str) -> List[AttemptView]:
        return [AttemptView.of(attempt) for attempt in self._store.list_for_account(account_id)]

    def _owned(self, attempt_id: str, requester_id: str) -> InterviewAttempt:
        # a foreign attempt looks exactly like a missing one
        attempt = self._store.get(attempt_id)
        if attempt is None or attempt.account_id != requester_id:
            raise NotFoundError(NOT_FOUND)
        return attempt

    def _complete(self, attempt: InterviewAttempt) -> None:
        pairs: Sequence[QuestionAnswerPair] = [
            QuestionAnswerPair(
                question=attempt.questions[entry.question_index].prompt,
                answer=entry.text,
                score=entry.score,
                feedback=entry.feedback,
            )
            for entry in attempt.ordered_answers()
        ]
        summary = self._provider.summarize_interview(
            attempt.kind,
            attempt.difficulty,
            attempt.tech_focus,
            pairs,
        )
        attempt.overall_score = summary.overall_score
        attempt.overall_feedback = summary.summary
        attempt.summary_weak_areas = list(summary.weak_areas)


__all__ = ["InterviewSessionService", "normalize_tech_focus", "parse_question_index"]
