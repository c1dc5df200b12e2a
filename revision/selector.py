"""
Pick the problems solved yesterday and render them as labels.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .clock import Clock
from .config import SUBMISSION_LIMIT
from .models import Catalog, Difficulty, Submission

logger = logging.getLogger(__name__)


def render_label(submission: Submission, catalog: Optional[Catalog]) -> str:
    """'{id}. {title} ({difficulty})', or the bare title for unknown slugs."""
    record = (catalog or {}).get(submission.slug)
    if record is None:
        return submission.title
    return f"{record.question_id}. {submission.title} ({record.difficulty})"


def iter_solved_labels(submissions: Iterable[Submission], catalog: Optional[Catalog],
                       clock: Clock, skip_easy: bool = True) -> Iterator[str]:
    """Yield unique labels of submissions made during yesterday, in input order."""
    catalog = catalog or {}
    window_start = clock.start_of_yesterday().timestamp()
    window_end = clock.start_of_today().timestamp()
    seen = set()

    for submission in submissions:
        if not window_start <= submission.timestamp < window_end:
            continue

        record = catalog.get(submission.slug)
        if skip_easy and record is not None and record.difficulty == Difficulty.EASY.value:
            continue

        label = render_label(submission, catalog)
        if label in seen:
            continue
        seen.add(label)
        yield label


def select_solved_yesterday(submissions: Iterable[Submission], catalog: Optional[Catalog],
                            clock: Clock, skip_easy: bool = True) -> List[str]:
    return list(iter_solved_labels(submissions, catalog, clock, skip_easy))


def fetch_solved_yesterday(client, username: str, catalog: Optional[Catalog], clock: Clock,
                           limit: int = SUBMISSION_LIMIT, skip_easy: bool = True) -> List[str]:
    submissions = client.fetch_recent_submissions(username, limit)
    logger.debug(f"Fetched {len(submissions)} accepted submissions for {username}")
    return select_solved_yesterday(submissions, catalog, clock, skip_easy)
