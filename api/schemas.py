"""Pydantic schemas for the HTTP API.

Request models accept loosely typed values; the services own validation so the
same messages come back whether a field is missing, mistyped or out of range.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field

from accounts import AccountView
from interview_session import AttemptView
from notes import NoteView


class RegisterReq(BaseModel):
    name: Any = None
    email: Any = None
    password: Any = None
    role: Any = None


class LoginReq(BaseModel):
    email: Any = None
    password: Any = None


class StartInterviewReq(BaseModel):
    kind: Any = None
    difficulty: Any = None
    tech_focus: Any = Field(default_factory=list)


class AnswerReq(BaseModel):
    question_index: Any = None
    answer_text: Any = None


class CreateNoteReq(BaseModel):
    title: Any = None
    subject: Any = None
    branch: Any = None
    semester: Any = None
    file_url: Any = None


class RateNoteReq(BaseModel):
    rating: Any = None


class AuthResp(BaseModel):  # Register/login payload; the refresh token travels as a cookie
    success: bool = True
    token: str
    account: AccountView


class RefreshResp(BaseModel):
    success: bool = True
    token: str


class LogoutResp(BaseModel):
    success: bool = True
    message: str = "Logged out."


class AccountResp(BaseModel):
    account: AccountView


class InterviewResp(BaseModel):
    interview: AttemptView


class InterviewListResp(BaseModel):
    interviews: List[AttemptView] = Field(default_factory=list)


class NoteResp(BaseModel):
    note: NoteView


class NoteListResp(BaseModel):
    notes: List[NoteView] = Field(default_factory=list)


class BookmarkResp(BaseModel):
    bookmarked: bool


class MessageResp(BaseModel):
    message: str


class HealthResp(BaseModel):
    status: str = "ok"
    service: str
