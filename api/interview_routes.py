"""FastAPI routes for mock-interview attempts."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from accounts import Identity
from api.deps import current_identity, get_container
from api.schemas import AnswerReq, InterviewListResp, InterviewResp, StartInterviewReq
from interview_session import StartResult, SubmitResult

router = APIRouter(prefix="/api/interviews")


@router.post("/start", response_model=StartResult, status_code=201)
def start(
    req: StartInterviewReq,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> StartResult:
    return container.interviews.start(identity.account_id, req.kind, req.difficulty, req.tech_focus)


@router.post("/{attempt_id}/answer", response_model=SubmitResult)
def answer(
    attempt_id: str,
    req: AnswerReq,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> SubmitResult:
    return container.interviews.submit_answer(attempt_id, identity.account_id, req.question_index, req.answer_text)


@router.get("/{attempt_id}", response_model=InterviewResp)
def get_interview(
    attempt_id: str,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> InterviewResp:
    return InterviewResp(interview=container.interviews.get_attempt(attempt_id, identity.account_id))


@router.get("", response_model=InterviewListResp)
def list_interviews(
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> InterviewListResp:
    return InterviewListResp(interviews=container.interviews.list_attempts(identity.account_id))
