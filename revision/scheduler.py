"""
Idempotent spaced-repetition reminders on Google Calendar.

For every offset a single "LeetCode Revision" event sits at 21:30 local
time, ``offset`` days after the day the problems were solved. Later runs
append only labels the event does not already list, so re-running the job
for the same day never grows a description twice.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .clock import Clock
from .models import CalendarEvent, OffsetOutcome, ReminderResult

logger = logging.getLogger(__name__)

REMINDER_SUMMARY = "LeetCode Revision"
SEARCH_QUERY = REMINDER_SUMMARY
REVISION_OFFSETS = (3, 7, 15)
ANCHOR_HOUR = 21
ANCHOR_MINUTE = 30
DURATION = timedelta(minutes=30)
SEARCH_PADDING = timedelta(hours=1)
COLOR_ID = "5"  # yellow
DATE_FORMAT = "%d-%m-%Y"


def format_block(labels: Iterable[str], solved_on: datetime) -> str:
    return f"Problems solved on {solved_on.strftime(DATE_FORMAT)}:\n" + "\n".join(labels)


def missing_labels(labels: Iterable[str], description: str, exact_lines: bool = False) -> List[str]:
    """Labels not yet recorded in an event description.

    By default a label counts as recorded when it occurs anywhere in the
    text. With ``exact_lines`` it has to be a whole line, so a label that
    happens to be a substring of another one is still added.
    """
    description = description or ""
    if exact_lines:
        recorded = {line.strip() for line in description.splitlines()}
        return [label for label in labels if label not in recorded]
    return [label for label in labels if label not in description]


class ReminderScheduler:
    def __init__(self, calendar, clock: Optional[Clock] = None, calendar_id: str = 'primary',
                 offsets: Sequence[int] = REVISION_OFFSETS, exact_lines: bool = False):
        self.calendar = calendar
        self.clock = clock or Clock()
        self.calendar_id = calendar_id
        self.offsets = sorted(offsets)
        self.exact_lines = exact_lines

    @property
    def time_zone(self) -> str:
        return self.clock.tz.key

    def anchor_time(self) -> datetime:
        """Yesterday at 21:30 local, the day the problems were solved."""
        return self.clock.yesterday_at(ANCHOR_HOUR, ANCHOR_MINUTE)

    def schedule(self, labels: Sequence[str]) -> List[ReminderResult]:
        """Create or extend one reminder per offset.

        A failing offset is logged and reported as FAILED; the remaining
        offsets are still processed.
        """
        labels = list(labels)
        if not labels:
            return []

        base_time = self.anchor_time()
        results = []
        for offset in self.offsets:
            target_date = (base_time + timedelta(days=offset)).date()
            try:
                results.append(self.schedule_offset(labels, base_time, offset))
            except Exception as error:
                logger.error(f"❌ Failed for {target_date.isoformat()}: {error}")
                results.append(ReminderResult(
                    offset_days=offset,
                    target_date=target_date,
                    outcome=OffsetOutcome.FAILED,
                    error=str(error),
                ))
        return results

    def find_existing(self, start_time: datetime, end_time: datetime) -> Optional[CalendarEvent]:
        events = self.calendar.search_events(
            self.calendar_id,
            start_time - SEARCH_PADDING,
            end_time + SEARCH_PADDING,
            SEARCH_QUERY,
        )
        # The search is a keyword match; only the exact title is ours
        for event in events:
            if event.summary == REMINDER_SUMMARY:
                return event
        return None

    def schedule_offset(self, labels: List[str], base_time: datetime, offset: int) -> ReminderResult:
        start_time = base_time + timedelta(days=offset)
        end_time = start_time + DURATION
        target_date = start_time.date()
        target_iso = target_date.isoformat()

        existing = self.find_existing(start_time, end_time)

        if existing is not None:
            logger.info(f"ℹ️ Finding existing event for {target_iso}... Found! Updating...")
            new_labels = missing_labels(labels, existing.description, self.exact_lines)
            if not new_labels:
                logger.info(f"⚠️ No new problems to add for {target_iso}.")
                return ReminderResult(offset, target_date, OffsetOutcome.SKIPPED, event_id=existing.id)

            description = f"{existing.description}\n\n{format_block(new_labels, base_time)}"
            self.calendar.patch_description(self.calendar_id, existing.id, description)
            logger.info(f"✅ Updated event for {target_iso}")
            return ReminderResult(offset, target_date, OffsetOutcome.UPDATED,
                                  event_id=existing.id, added_labels=new_labels)

        logger.info(f"ℹ️ No existing event for {target_iso}. Creating new...")
        created = self.calendar.create_event(
            calendar_id=self.calendar_id,
            summary=REMINDER_SUMMARY,
            description=format_block(labels, base_time),
            start_time=start_time,
            end_time=end_time,
            time_zone=self.time_zone,
            color_id=COLOR_ID,
        )
        logger.info(f"✅ Created event for {target_iso}")
        return ReminderResult(offset, target_date, OffsetOutcome.CREATED,
                              event_id=created.id, added_labels=list(labels))
