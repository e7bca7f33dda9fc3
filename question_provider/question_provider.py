from __future__ import annotations  # Question generation and answer scoring capability

import logging
from typing import List, Optional, Protocol, Sequence

from config import LlmRoute, Settings, route_from_settings
from errors import ParseError
from llm_gateway import HttpClient, chat, parse_json_object
from observability import span

from .prompts import SYSTEM_PROMPT, build_evaluation_task, build_questions_task, build_summary_task
from .types import QUESTION_COUNT, Evaluation, InterviewSummary, Question, QuestionAnswerPair

logger = logging.getLogger(__name__)


class QuestionProvider(Protocol):  # Capability consumed by the interview session
    def generate_questions(self, kind: str, difficulty: str, tech_focus: Sequence[str]) -> List[Question]: ...

    def evaluate_answer(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        question: str,
        answer_text: str,
    ) -> Evaluation: ...

    def summarize_interview(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        pairs: Sequence[QuestionAnswerPair],
    ) -> InterviewSummary: ...


class LlmQuestionProvider:
    """Provider backed by an OpenAI-compatible chat completion endpoint.

    One request per call, no retries. Output that is not clean JSON gets a
    single salvage pass in :func:`llm_gateway.parse_json_object`.
    """

    def __init__(self, route: LlmRoute, *, max_text_chars: int = 4000, client: Optional[HttpClient] = None) -> None:
        self._route = route
        self._limit = max_text_chars
        self._client = client

    def generate_questions(self, kind: str, difficulty: str, tech_focus: Sequence[str]) -> List[Question]:
        task = build_questions_task(kind, difficulty, tech_focus)
        with span("provider.generate_questions"):
            raw = self._ask(task, temperature=0.6)
        entries = raw.get("questions")
        if not isinstance(entries, list):
            raise ParseError("AI did not return a questions array.")
        questions: List[Question] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            prompt = str(entry.get("prompt") or "").strip()
            if not prompt:
                continue
            category = str(entry.get("category") or "").strip() or "General"
            questions.append(Question(prompt=prompt, category=category))
        if len(questions) != QUESTION_COUNT:
            logger.warning("Provider returned %d usable questions, expected %d", len(questions), QUESTION_COUNT)
            raise ParseError("AI did not return exactly 5 valid questions.")
        return questions

    def evaluate_answer(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        question: str,
        answer_text: str,
    ) -> Evaluation:
        task = build_evaluation_task(kind, difficulty, tech_focus, question, answer_text, limit=self._limit)
        with span("provider.evaluate_answer"):
            raw = self._ask(task, temperature=0.3)
        return Evaluation.from_raw(raw)

    def summarize_interview(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        pairs: Sequence[QuestionAnswerPair],
    ) -> InterviewSummary:
        task = build_summary_task(kind, difficulty, tech_focus, pairs, limit=self._limit)
        with span("provider.summarize_interview"):
            raw = self._ask(task, temperature=0.3)
        return InterviewSummary.from_raw(raw)

    def _ask(self, task: str, *, temperature: float) -> dict:
        content = chat(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": task},
            ],
            cfg=self._route,
            client=self._client,
            options={"temperature": temperature},
        )
        return parse_json_object(content)


STUB_QUESTIONS = (
    ("Can you explain the difference between a process and a thread?", "OS"),
    ("Describe a challenging bug you recently fixed. How did you approach it?", "Experience"),
    ("What is the time complexity of finding an element in a hash map versus a binary search tree?", "DSA"),
    ("Explain the concept of a closure in JavaScript or a similar concept in your preferred language.", "Language"),
    ("How do you handle receiving negative feedback from an engineering manager?", "HR"),
)


class StubQuestionProvider:
    """Deterministic placeholder content used when no provider key is configured."""

    def generate_questions(self, kind: str, difficulty: str, tech_focus: Sequence[str]) -> List[Question]:
        return [Question(prompt=prompt, category=category) for prompt, category in STUB_QUESTIONS]

    def evaluate_answer(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        question: str,
        answer_text: str,
    ) -> Evaluation:
        return Evaluation(
            correctness=3,
            clarity=2,
            depth=1,
            communication=1,
            feedback=(
                "This is a good start, but you could provide more depth by bringing up "
                "specific examples or edge cases."
            ),
            weak_areas=["Deep dives into edge cases"],
        )

    def summarize_interview(
        self,
        kind: str,
        difficulty: str,
        tech_focus: Sequence[str],
        pairs: Sequence[QuestionAnswerPair],
    ) -> InterviewSummary:
        return InterviewSummary(
            overall_score=7.5,
            summary=(
                "The candidate demonstrated a strong baseline understanding of core concepts but "
                "struggled slightly with architectural depth. Communication was generally clear and "
                "concise. Overall, a solid performance requiring minor polish on edge case handling."
            ),
            weak_areas=["Architectural depth", "Edge cases"],
        )


def build_provider(settings: Settings, *, client: Optional[HttpClient] = None) -> QuestionProvider:
    """Pick the provider once, at composition time."""

    if settings.wants_stub_provider():
        logger.warning("No usable OPENAI_API_KEY configured; using the deterministic stub provider.")
        return StubQuestionProvider()
    return LlmQuestionProvider(
        route_from_settings(settings),
        max_text_chars=settings.MAX_ANSWER_CHARS,
        client=client,
    )


__all__ = ["QuestionProvider", "LlmQuestionProvider", "StubQuestionProvider", "build_provider"]
