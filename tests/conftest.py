import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient

from accounts import AccountStore
from app_server import build_container, create_app
from config import load_settings
from question_provider import Evaluation, InterviewSummary, Question, QuestionAnswerPair
from storage.migrate import migrate

TEST_SECRET = "test-secret-for-jwt-signing-only"


class FakeProvider:
    """Deterministic provider that records every call it receives."""

    def __init__(self) -> None:
        self.calls: Dict[str, int] = {"generate": 0, "evaluate": 0, "summarize": 0}
        self.evaluations: List[Evaluation] = []
        self.summary = InterviewSummary(overall_score=6.5, summary="Solid fundamentals.", weak_areas=["Depth"])
        self.summarized_pairs: List[QuestionAnswerPair] = []
        self.fail_with: Optional[Exception] = None

    def generate_questions(self, kind: str, difficulty: str, tech_focus: Sequence[str]) -> List[Question]:
        self.calls["generate"] += 1
        if self.fail_with is not None:
            raise self.fail_with
        return [Question(prompt=f"{kind} question {n}", category="General") for n in range(1, 6)]

    def evaluate_answer(self, kind, difficulty, tech_focus, question, answer_text) -> Evaluation:
        self.calls["evaluate"] += 1
        if self.fail_with is not None:
            raise self.fail_with
        if self.evaluations:
            return self.evaluations.pop(0)
        return Evaluation(
            correctness=3,
            clarity=1.5,
            depth=1,
            communication=1.5,
            feedback=f"Feedback for: {answer_text}",
            weak_areas=["Edge cases"],
        )

    def summarize_interview(self, kind, difficulty, tech_focus, pairs) -> InterviewSummary:
        self.calls["summarize"] += 1
        self.summarized_pairs = list(pairs)
        return self.summary


@pytest.fixture
def settings(tmp_path):
    return load_settings(
        ENVIRONMENT="test",
        DB_PATH=str(tmp_path / "test.db"),
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        AI_PROVIDER="stub",
    )


@pytest.fixture
def db_path(settings) -> str:
    migrate(settings.DB_PATH)
    return settings.DB_PATH


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def container(settings, fake_provider):
    return build_container(settings, provider=fake_provider)


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container=container))


@pytest.fixture
def make_account(db_path):
    accounts = AccountStore(db_path)
    counter = {"n": 0}

    def _make(role: str = "student", email: Optional[str] = None):
        counter["n"] += 1
        return accounts.create(
            name=f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            role=role,
        )

    return _make
