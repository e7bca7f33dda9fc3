from __future__ import annotations  # Re-export question_provider public API

from .question_provider import (  # noqa: F401
    LlmQuestionProvider,
    QuestionProvider,
    StubQuestionProvider,
    build_provider,
)
from .types import (  # noqa: F401
    DIFFICULTY_LEVELS,
    INTERVIEW_KINDS,
    QUESTION_COUNT,
    Evaluation,
    InterviewSummary,
    Question,
    QuestionAnswerPair,
    composite_score,
)

__all__ = [
    "LlmQuestionProvider",
    "QuestionProvider",
    "StubQuestionProvider",
    "build_provider",
    "DIFFICULTY_LEVELS",
    "INTERVIEW_KINDS",
    "QUESTION_COUNT",
    "Evaluation",
    "InterviewSummary",
    "Question",
    "QuestionAnswerPair",
    "composite_score",
]
