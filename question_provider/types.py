"""Shared value types for the question provider."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

InterviewKind = Literal["technical", "hr", "mixed"]
Difficulty = Literal["easy", "medium", "hard"]

INTERVIEW_KINDS = ("technical", "hr", "mixed")
DIFFICULTY_LEVELS = ("easy", "medium", "hard")
QUESTION_COUNT = 5
MAX_SCORE = 10.0

SUB_SCORE_LIMITS = {
    "correctness": 4.0,
    "clarity": 2.0,
    "depth": 2.0,
    "communication": 2.0,
}


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def as_number(value: Any) -> float:
    """Coerce provider output to a float; anything unreadable counts as zero."""

    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def clean_tags(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    return [str(item).strip() for item in raw if item is not None and str(item).strip()]


class Question(BaseModel):
    prompt: str
    category: Optional[str] = None


class Evaluation(BaseModel):
    """Rubric scores for one answer; ``score`` is always the clamped sum."""

    correctness: float = Field(ge=0, le=4)
    clarity: float = Field(ge=0, le=2)
    depth: float = Field(ge=0, le=2)
    communication: float = Field(ge=0, le=2)
    feedback: str = ""
    weak_areas: List[str] = Field(default_factory=list)

    @property
    def score(self) -> float:
        return composite_score(self.correctness, self.clarity, self.depth, self.communication)

    @classmethod
    def from_raw(cls, raw: dict) -> "Evaluation":
        values = {
            name: clamp(as_number(raw.get(name)), 0.0, limit)
            for name, limit in SUB_SCORE_LIMITS.items()
        }
        return cls(
            **values,
            feedback=str(raw.get("feedback") or "").strip(),
            weak_areas=clean_tags(raw.get("weakAreas", raw.get("weak_areas"))),
        )


class InterviewSummary(BaseModel):
    overall_score: float = Field(ge=0, le=MAX_SCORE)
    summary: str = ""
    weak_areas: List[str] = Field(default_factory=list)

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> float:
        return clamp(as_number(value), 0.0, MAX_SCORE)

    @classmethod
    def from_raw(cls, raw: dict) -> "InterviewSummary":
        return cls(
            overall_score=raw.get("overallScore", raw.get("overall_score")),
            summary=str(raw.get("summary") or "").strip(),
            weak_areas=clean_tags(raw.get("weakAreas", raw.get("weak_areas"))),
        )


class QuestionAnswerPair(BaseModel):  # One graded exchange fed into the summary
    question: str
    answer: str
    score: float
    feedback: str = ""


def composite_score(correctness: float, clarity: float, depth: float, communication: float) -> float:
    return clamp(correctness + clarity + depth + communication, 0.0, MAX_SCORE)
