from __future__ import annotations  # Note entities

from typing import Dict

from pydantic import BaseModel, Field

from question_provider.types import round1

FIELD_LIMITS = {"title": 200, "subject": 120, "branch": 50, "semester": 20}


class NoteRecord(BaseModel):  # Stored note with its ratings keyed by rater
    note_id: str
    title: str
    subject: str
    branch: str
    semester: str
    file_url: str
    uploaded_by: str
    approved: bool = False
    downloads: int = 0
    ratings: Dict[str, int] = Field(default_factory=dict)
    created_at: str
    updated_at: str

    @property
    def average_rating(self) -> float:
        if not self.ratings:
            return 0.0
        return round1(sum(self.ratings.values()) / len(self.ratings))

    def public(self) -> "NoteView":
        return NoteView(
            id=self.note_id,
            title=self.title,
            subject=self.subject,
            branch=self.branch,
            semester=self.semester,
            file_url=self.file_url,
            uploaded_by=self.uploaded_by,
            downloads=self.downloads,
            approved=self.approved,
            average_rating=self.average_rating,
            rating_count=len(self.ratings),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class NoteView(BaseModel):  # Note returned to clients; rating figures are derived
    id: str
    title: str
    subject: str
    branch: str
    semester: str
    file_url: str
    uploaded_by: str
    downloads: int
    approved: bool
    average_rating: float
    rating_count: int
    created_at: str
    updated_at: str
