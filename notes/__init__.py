from __future__ import annotations  # Re-export notes public API

from .models import FIELD_LIMITS, NoteRecord, NoteView  # noqa: F401
from .notes import NoteService, parse_rating  # noqa: F401
from .store import NoteStore  # noqa: F401

__all__ = ["FIELD_LIMITS", "NoteRecord", "NoteView", "NoteService", "parse_rating", "NoteStore"]
