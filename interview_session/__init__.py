from __future__ import annotations  # Re-export interview_session public API

from .interview_session import (  # noqa: F401
    InterviewSessionService,
    normalize_tech_focus,
    parse_question_index,
)
from .models import AnswerEntry, AttemptView, InterviewAttempt, StartResult, SubmitResult  # noqa: F401
from .store import AttemptStore  # noqa: F401

__all__ = [
    "InterviewSessionService",
    "normalize_tech_focus",
    "parse_question_index",
    "AnswerEntry",
    "AttemptView",
    "InterviewAttempt",
    "StartResult",
    "SubmitResult",
    "AttemptStore",
]
