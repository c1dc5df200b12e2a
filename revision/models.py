"""
Data models for LeetCode and Calendar entities.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class ProblemRecord:
    slug: str
    question_id: str
    difficulty: str


# slug -> record, built once per run and only read afterwards
Catalog = Dict[str, ProblemRecord]


@dataclass(frozen=True)
class Submission:
    title: str
    slug: str
    timestamp: int

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Submission":
        """Build a submission from a recentAcSubmissionList row."""
        return cls(
            title=item.get('title', ''),
            slug=item.get('titleSlug', ''),
            timestamp=int(item.get('timestamp', 0)),
        )


@dataclass
class CalendarEvent:
    id: str
    summary: str
    description: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    status: str
    color_id: str
    calendar_id: str


class OffsetOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ReminderResult:
    offset_days: int
    target_date: date
    outcome: OffsetOutcome
    event_id: Optional[str] = None
    added_labels: List[str] = field(default_factory=list)
    error: Optional[str] = None
