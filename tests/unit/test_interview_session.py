from __future__ import annotations

import pytest

from errors import NotFoundError, ProviderError, ValidationError
from interview_session import AttemptStore, InterviewSessionService, normalize_tech_focus, parse_question_index
from question_provider import Evaluation


@pytest.fixture
def store(db_path) -> AttemptStore:
    return AttemptStore(db_path)


@pytest.fixture
def service(store, fake_provider) -> InterviewSessionService:
    return InterviewSessionService(store, fake_provider)


@pytest.fixture
def owner(make_account):
    return make_account()


def test_start_persists_attempt_with_five_questions_and_no_answers(service, store, owner):
    result = service.start(owner.account_id, "technical", "easy", [" React ", "react", "", "SQL"])
    assert result.question_index == 0
    assert result.total_questions == 5

    attempt = store.get(result.attempt_id)
    assert attempt is not None
    assert len(attempt.questions) == 5
    assert attempt.answers == {}
    assert attempt.status == "created"
    assert attempt.tech_focus == ["React", "SQL"]


@pytest.mark.parametrize(
    "kind,difficulty,message",
    [("coding", "easy", "kind must be one of"), ("technical", "insane", "difficulty must be one of")],
)
def test_start_rejects_unknown_kind_or_difficulty(service, fake_provider, owner, kind, difficulty, message):
    with pytest.raises(ValidationError, match=message):
        service.start(owner.account_id, kind, difficulty)
    assert fake_provider.calls["generate"] == 0


def test_start_surfaces_provider_failure_without_persisting(service, store, fake_provider, owner):
    fake_provider.fail_with = ProviderError("AI features are not configured. Missing API key.")
    with pytest.raises(ProviderError):
        service.start(owner.account_id, "hr", "medium")
    assert store.list_for_account(owner.account_id) == []


@pytest.mark.parametrize("bad", [-1, 5, 1.5, "two", None, True, "3.0"])
def test_invalid_index_rejected_without_mutation(service, store, fake_provider, owner, bad):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id
    before = store.get(attempt_id)
    with pytest.raises(ValidationError):
        service.submit_answer(attempt_id, owner.account_id, bad, "An answer")
    assert store.get(attempt_id) == before
    assert fake_provider.calls["evaluate"] == 0


def test_blank_answer_rejected(service, owner):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id
    with pytest.raises(ValidationError, match="answer text"):
        service.submit_answer(attempt_id, owner.account_id, 0, "   ")


def test_parse_question_index_accepts_integral_forms():
    assert parse_question_index(3) == 3
    assert parse_question_index(2.0) == 2
    assert parse_question_index(" 4 ") == 4


@pytest.mark.parametrize("value", [5, -1, 1.5, "two", True, None])
def test_parse_question_index_names_the_request_field(value):
    with pytest.raises(ValidationError, match="question_index must be an integer between 0 and 4"):
        parse_question_index(value)


def test_normalize_tech_focus_ignores_non_lists():
    assert normalize_tech_focus("React") == []
    assert normalize_tech_focus(None) == []
    assert normalize_tech_focus(["Go", "GO", "go "]) == ["Go"]


def test_non_owner_sees_same_not_found_as_missing(service, owner, make_account):
    stranger = make_account()
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id

    with pytest.raises(NotFoundError) as foreign:
        service.get_attempt(attempt_id, stranger.account_id)
    with pytest.raises(NotFoundError) as missing:
        service.get_attempt("does-not-exist", stranger.account_id)
    assert foreign.value.message == missing.value.message

    with pytest.raises(NotFoundError):
        service.submit_answer(attempt_id, stranger.account_id, 0, "hijack")


def test_resubmission_replaces_entry_in_place(service, store, fake_provider, owner):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id
    fake_provider.evaluations = [
        Evaluation(correctness=1, clarity=1, depth=0, communication=0, feedback="weak"),
        Evaluation(correctness=4, clarity=2, depth=2, communication=1, feedback="strong"),
    ]
    service.submit_answer(attempt_id, owner.account_id, 2, "first try")
    result = service.submit_answer(attempt_id, owner.account_id, 2, "second try")

    attempt = store.get(attempt_id)
    assert list(attempt.answers) == [2]
    entry = attempt.answers[2]
    assert (entry.text, entry.score, entry.feedback) == ("second try", 9, "strong")
    assert result.answer.score == 9
    assert attempt.status == "in_progress"


def test_composite_equals_sum_of_sub_scores_for_stored_answers(service, store, owner):
    attempt_id = service.start(owner.account_id, "mixed", "medium").attempt_id
    for index in range(3):
        service.submit_answer(attempt_id, owner.account_id, index, f"answer {index}")
    for entry in store.get(attempt_id).ordered_answers():
        assert entry.score == pytest.approx(entry.correctness + entry.clarity + entry.depth + entry.communication)
        assert 0 <= entry.score <= 10


def test_completion_happens_once_in_any_order(service, store, fake_provider, owner):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id

    order = [3, 0, 4, 1]
    for index in order:
        result = service.submit_answer(attempt_id, owner.account_id, index, f"answer {index}")
        assert result.is_complete is False
        assert result.final_score is None
    assert fake_provider.calls["summarize"] == 0

    final = service.submit_answer(attempt_id, owner.account_id, 2, "answer 2")
    assert final.is_complete is True
    assert final.next_index is None
    assert final.final_score == 6.5
    assert final.final_feedback == "Solid fundamentals."
    assert fake_provider.calls["summarize"] == 1
    assert [pair.answer for pair in fake_provider.summarized_pairs] == [f"answer {i}" for i in range(5)]

    again = service.submit_answer(attempt_id, owner.account_id, 0, "late rewrite")
    assert again.is_complete is True
    assert fake_provider.calls["summarize"] == 1

    attempt = store.get(attempt_id)
    assert attempt.status == "complete"
    assert attempt.overall_score == 6.5
    assert attempt.answers[0].text == "late rewrite"


def test_next_index_is_lowest_unanswered_after_current_with_wrap(service, owner):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id
    assert service.submit_answer(attempt_id, owner.account_id, 0, "a").next_index == 1
    assert service.submit_answer(attempt_id, owner.account_id, 3, "b").next_index == 4
    result = service.submit_answer(attempt_id, owner.account_id, 4, "c")
    assert result.next_index == 1
    assert result.next_question is not None


def test_provider_failure_on_evaluate_leaves_attempt_unchanged(service, store, fake_provider, owner):
    attempt_id = service.start(owner.account_id, "technical", "easy").attempt_id
    fake_provider.fail_with = ProviderError()
    with pytest.raises(ProviderError):
        service.submit_answer(attempt_id, owner.account_id, 0, "answer")
    assert store.get(attempt_id).answers == {}


def test_list_attempts_newest_first(service, owner):
    first = service.start(owner.account_id, "technical", "easy").attempt_id
    second = service.start(owner.account_id, "hr", "hard").attempt_id
    assert [view.id for view in service.list_attempts(owner.account_id)] == [second, first]
