"""Shared study notes: upload metadata, discovery, bookmarks, ratings and moderation.

Notes are created unapproved. Until an admin approves one, only its uploader
can see it. Rejecting a note removes it together with its ratings and any
bookmarks pointing at it.
"""
from __future__ import annotations

from typing import Any, List, Optional
from uuid import uuid4

from accounts import AccountStore, AuthService, Identity
from errors import ForbiddenError, NotFoundError, ValidationError
from observability import log_event
from storage.sqlite import utcnow

from .models import FIELD_LIMITS, NoteRecord, NoteView
from .store import NoteStore


NOT_FOUND = "Note not found."
RATING_RANGE = (1, 5)


def _required_text(payload: dict, field: str, limit: Optional[int]) -> str:
    value = payload.get(field)
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f"{field} is required.")
    if limit is not None and len(text) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters.")
    return text


def parse_rating(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Rating must be between 1 and 5.")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not RATING_RANGE[0] <= value <= RATING_RANGE[1]:
        raise ValidationError("Rating must be between 1 and 5.")
    return value


class NoteService:
    def __init__(self, notes: NoteStore, accounts: AccountStore) -> None:
        self._notes = notes
        self._accounts = accounts

    def create_note(
        self,
        uploader_id: str,
        *,
        title: Any,
        subject: Any,
        branch: Any,
        semester: Any,
        file_url: Any,
    ) -> NoteView:
        payload = {
            "title": title,
            "subject": subject,
            "branch": branch,
            "semester": semester,
            "file_url": file_url,
        }
        fields = {name: _required_text(payload, name, FIELD_LIMITS.get(name)) for name in payload}
        now = utcnow()
        record = self._notes.create(
            NoteRecord(
                note_id=uuid4().hex,
                uploaded_by=uploader_id,
                created_at=now,
                updated_at=now,
                **fields,
            )
        )
        log_event("note.create", record.note_id, role="uploader", outcome="pending")
        return record.public()

    def list_notes(
        self,
        *,
        branch: Optional[str] = None,
        semester: Optional[str] = None,
        subject: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[NoteView]:
        records = self._notes.search(
            approved=True,
            branch=(branch or "").strip() or None,
            semester=(semester or "").strip() or None,
            subject=(subject or "").strip() or None,
            query=(q or "").strip() or None,
        )
        return [record.public() for record in records]

    def get_note(self, note_id: str, requester: Identity) -> NoteView:
        return self._visible(note_id, requester).public()

    def record_download(self, note_id: str, requester: Identity) -> NoteView:
        self._visible(note_id, requester)
        self._notes.increment_downloads(note_id)
        return self._require(note_id).public()

    def toggle_bookmark(self, account_id: str, note_id: str) -> bool:
        if self._accounts.get(account_id) is None:
            raise NotFoundError("User not found.")
        self._require(note_id)
        return self._accounts.toggle_bookmark(account_id, note_id)

    def list_bookmarks(self, account_id: str) -> List[NoteView]:
        note_ids = self._accounts.list_bookmarks(account_id)
        return [record.public() for record in self._notes.get_many(note_ids)]

    def rate_note(self, note_id: str, requester: Identity, value: Any) -> NoteView:
        rating = parse_rating(value)
        self._visible(note_id, requester)
        self._notes.upsert_rating(note_id, requester.account_id, rating)
        return self._require(note_id).public()

    # Moderation

    def list_pending(self, requester: Identity) -> List[NoteView]:
        AuthService.require_role(requester, "admin")
        records = self._notes.search(approved=False, newest_first=False)
        return [record.public() for record in records]

    def approve(self, note_id: str, requester: Identity) -> NoteView:
        AuthService.require_role(requester, "admin")
        self._require(note_id)
        self._notes.set_approved(note_id, True)
        log_event("note.approve", note_id, role=requester.role, outcome="approved")
        return self._require(note_id).public()

    def reject(self, note_id: str, requester: Identity) -> None:
        AuthService.require_role(requester, "admin")
        if not self._notes.delete(note_id):
            raise NotFoundError(NOT_FOUND)
        log_event("note.reject", note_id, role=requester.role, outcome="removed")

    delete = reject

    def _require(self, note_id: str) -> NoteRecord:
        record = self._notes.get(note_id)
        if record is None:
            raise NotFoundError(NOT_FOUND)
        return record

    def _visible(self, note_id: str, requester: Identity) -> NoteRecord:
        record = self._require(note_id)
        if not record.approved and record.uploaded_by != requester.account_id:
            raise ForbiddenError("This note is awaiting approval.")
        return record


__all__ = ["NoteService", "parse_rating"]
