"""Per-account dashboard statistics derived from interview attempts."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from accounts import AccountStore
from interview_session import AttemptStore, InterviewAttempt
from question_provider.types import round1

WEAK_TOPIC_LIMIT = 10
RECENT_LIMIT = 5


class RecentActivity(BaseModel):
    type: str = "interview"
    id: str
    label: str
    score: Optional[float] = None
    created_at: str


class DashboardStats(BaseModel):
    total_interviews: int
    average_score: Optional[float] = None
    weak_topics: List[str] = Field(default_factory=list)
    bookmarked_notes_count: int = 0
    recent_activity: List[RecentActivity] = Field(default_factory=list)


def average_score(attempts: List[InterviewAttempt]) -> Optional[float]:
    scores = [attempt.overall_score for attempt in attempts if attempt.overall_score is not None]
    if not scores:
        return None
    return round1(sum(scores) / len(scores))


def weak_topics(attempts: List[InterviewAttempt], limit: int = WEAK_TOPIC_LIMIT) -> List[str]:
    """Most frequent weak areas of completed attempts; ties keep first-seen order."""

    counts: Dict[str, int] = {}
    for attempt in attempts:
        if attempt.overall_score is None:
            continue
        for entry in attempt.ordered_answers():
            for tag in entry.weak_areas:
                if tag:
                    counts[tag] = counts.get(tag, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [tag for tag, _ in ranked[:limit]]


def recent_activity(attempts: List[InterviewAttempt], limit: int = RECENT_LIMIT) -> List[RecentActivity]:
    return [
        RecentActivity(
            id=attempt.attempt_id,
            label=f"{attempt.kind} • {attempt.difficulty}",
            score=attempt.overall_score,
            created_at=attempt.created_at,
        )
        for attempt in attempts[:limit]
    ]


class DashboardService:
    """Read-only projection, recomputed on every call."""

    def __init__(self, attempts: AttemptStore, accounts: AccountStore) -> None:
        self._attempts = attempts
        self._accounts = accounts

    def compute_stats(self, account_id: str) -> DashboardStats:
        attempts = self._attempts.list_for_account(account_id)
        return DashboardStats(
            total_interviews=len(attempts),
            average_score=average_score(attempts),
            weak_topics=weak_topics(attempts),
            bookmarked_notes_count=len(self._accounts.list_bookmarks(account_id)),
            recent_activity=recent_activity(attempts),
        )


__all__ = [
    "DashboardService",
    "DashboardStats",
    "RecentActivity",
    "average_score",
    "weak_topics",
    "recent_activity",
]
