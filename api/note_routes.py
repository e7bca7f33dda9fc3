"""FastAPI routes for the notes portal and its moderation queue."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends

from accounts import Identity
from api.deps import current_identity, get_container, require_admin
from api.schemas import BookmarkResp, CreateNoteReq, MessageResp, NoteListResp, NoteResp, RateNoteReq

router = APIRouter(prefix="/api/notes")


@router.post("", response_model=NoteResp, status_code=201)
def create_note(
    req: CreateNoteReq,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> NoteResp:
    note = container.notes.create_note(
        identity.account_id,
        title=req.title,
        subject=req.subject,
        branch=req.branch,
        semester=req.semester,
        file_url=req.file_url,
    )
    return NoteResp(note=note)


@router.get("", response_model=NoteListResp)
def list_notes(
    branch: Optional[str] = None,
    semester: Optional[str] = None,
    subject: Optional[str] = None,
    q: Optional[str] = None,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> NoteListResp:
    notes = container.notes.list_notes(branch=branch, semester=semester, subject=subject, q=q)
    return NoteListResp(notes=notes)


@router.get("/me/bookmarks", response_model=NoteListResp)
def my_bookmarks(identity: Identity = Depends(current_identity), container: Any = Depends(get_container)) -> NoteListResp:
    return NoteListResp(notes=container.notes.list_bookmarks(identity.account_id))


@router.get("/admin/pending", response_model=NoteListResp)
def pending(identity: Identity = Depends(require_admin), container: Any = Depends(get_container)) -> NoteListResp:
    return NoteListResp(notes=container.notes.list_pending(identity))


@router.get("/{note_id}", response_model=NoteResp)
def get_note(
    note_id: str,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> NoteResp:
    return NoteResp(note=container.notes.get_note(note_id, identity))


@router.post("/{note_id}/download", response_model=NoteResp)
def download(
    note_id: str,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> NoteResp:
    return NoteResp(note=container.notes.record_download(note_id, identity))


@router.post("/{note_id}/bookmark", response_model=BookmarkResp)
def bookmark(
    note_id: str,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> BookmarkResp:
    return BookmarkResp(bookmarked=container.notes.toggle_bookmark(identity.account_id, note_id))


@router.post("/{note_id}/rate", response_model=NoteResp)
def rate(
    note_id: str,
    req: RateNoteReq,
    identity: Identity = Depends(current_identity),
    container: Any = Depends(get_container),
) -> NoteResp:
    return NoteResp(note=container.notes.rate_note(note_id, identity, req.rating))


@router.post("/{note_id}/approve", response_model=NoteResp)
def approve(
    note_id: str,
    identity: Identity = Depends(require_admin),
    container: Any = Depends(get_container),
) -> NoteResp:
    return NoteResp(note=container.notes.approve(note_id, identity))


@router.post("/{note_id}/reject", response_model=MessageResp)
def reject(
    note_id: str,
    identity: Identity = Depends(require_admin),
    container: Any = Depends(get_container),
) -> MessageResp:
    container.notes.reject(note_id, identity)
    return MessageResp(message="Note rejected and removed.")


@router.delete("/{note_id}", response_model=MessageResp)
def delete_note(
    note_id: str,
    identity: Identity = Depends(require_admin),
    container: Any = Depends(get_container),
) -> MessageResp:
    container.notes.delete(note_id, identity)
    return MessageResp(message="Note deleted.")
