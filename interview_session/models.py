"""Interview attempt document and its derived state."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from question_provider import Question
from question_provider.types import Difficulty, InterviewKind

AttemptStatus = Literal["created", "in_progress", "complete"]


class AnswerEntry(BaseModel):
    question_index: int = Field(ge=0, le=4)
    text: str
    score: float = Field(ge=0, le=10)
    correctness: float = Field(ge=0, le=4)
    clarity: float = Field(ge=0, le=2)
    depth: float = Field(ge=0, le=2)
    communication: float = Field(ge=0, le=2)
    feedback: str = ""
    weak_areas: List[str] = Field(default_factory=list)


class InterviewAttempt(BaseModel):
    attempt_id: str
    account_id: str
    kind: InterviewKind
    difficulty: Difficulty
    tech_focus: List[str] = Field(default_factory=list)
    questions: List[Question]
    answers: Dict[int, AnswerEntry] = Field(default_factory=dict)
    overall_score: Optional[float] = Field(default=None, ge=0, le=10)
    overall_feedback: Optional[str] = None
    summary_weak_areas: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def all_answered(self) -> bool:
        return len(self.answers) == self.total_questions

    @property
    def status(self) -> AttemptStatus:
        if not self.answers:
            return "created"
        if self.all_answered and self.overall_score is not None:
            return "complete"
        return "in_progress"

    def ordered_answers(self) -> List[AnswerEntry]:
        return [self.answers[index] for index in sorted(self.answers)]

    def next_unanswered(self, after: int) -> Optional[int]:
        """Lowest unanswered index after ``after``, wrapping to the lowest overall."""

        pending = [index for index in range(self.total_questions) if index not in self.answers]
        if not pending:
            return None
        later = [index for index in pending if index > after]
        return later[0] if later else pending[0]


class AttemptView(BaseModel):  # Full attempt returned to its owner
    id: str
    kind: InterviewKind
    difficulty: Difficulty
    tech_focus: List[str]
    status: AttemptStatus
    questions: List[Question]
    answers: List[AnswerEntry]
    score: Optional[float] = None
    feedback: Optional[str] = None
    summary_weak_areas: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str

    @classmethod
    def of(cls, attempt: InterviewAttempt) -> "AttemptView":
        return cls(
            id=attempt.attempt_id,
            kind=attempt.kind,
            difficulty=attempt.difficulty,
            tech_focus=list(attempt.tech_focus),
            status=attempt.status,
            questions=list(attempt.questions),
            answers=attempt.ordered_answers(),
            score=attempt.overall_score,
            feedback=attempt.overall_feedback,
            summary_weak_areas=list(attempt.summary_weak_areas),
            created_at=attempt.created_at,
            updated_at=attempt.updated_at,
        )


class StartResult(BaseModel):
    attempt_id: str
    question_index: int = 0
    total_questions: int
    question: Question


class SubmitResult(BaseModel):
    question_index: int
    question: Question
    answer: AnswerEntry
    next_question: Optional[Question] = None
    next_index: Optional[int] = None
    is_complete: bool = False
    final_score: Optional[float] = None
    final_feedback: Optional[str] = None
