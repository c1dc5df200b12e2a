"""
Daily job: schedule revision reminders for the LeetCode problems solved yesterday.

Run once a day from cron or a CI schedule. Exit codes:
    0  reminders scheduled, or nothing was solved yesterday
    1  unrecoverable failure
    2  LeetCode session expired (refresh LEETCODE_SESSION_COOKIE)
"""

import argparse
import logging
import sys
from typing import List, Optional

from revision.calendar_client import CalendarClient
from revision.clock import Clock
from revision.config import ConfigError, Settings
from revision.leetcode_client import EXIT_AUTH_FAILED, LeetCodeClient
from revision.scheduler import ReminderScheduler
from revision.selector import fetch_solved_yesterday

logger = logging.getLogger("revision_tracker")

EXIT_OK = 0
EXIT_FATAL = 1

__all__ = ["EXIT_OK", "EXIT_FATAL", "EXIT_AUTH_FAILED", "main", "schedule_for_revision"]

LEETCODE_SETTINGS = ('leetcode_session_cookie', 'leetcode_csrf_token', 'leetcode_username')
GOOGLE_SETTINGS = ('google_client_id', 'google_client_secret', 'google_refresh_token')


def configure_logging(level: str = 'INFO'):
    logging.basicConfig(level=level, format='%(message)s', stream=sys.stdout)
    # Keep third-party chatter out of the job output
    logging.getLogger('googleapiclient').setLevel(logging.WARNING)
    logging.getLogger('google').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def schedule_for_revision(settings: Settings, clock: Optional[Clock] = None,
                          leetcode: Optional[LeetCodeClient] = None,
                          calendar: Optional[CalendarClient] = None,
                          dry_run: bool = False) -> List[str]:
    """Run catalog -> selection -> scheduling and return the labels handled."""
    clock = clock or Clock()
    leetcode = leetcode or LeetCodeClient.from_settings(settings)

    logger.info("🚀 Starting LeetCode Tracker...")
    catalog = leetcode.fetch_catalog()
    if catalog is None:
        logger.warning("⚠️ Problem catalog unavailable, falling back to bare titles.")

    problems = fetch_solved_yesterday(
        leetcode,
        settings.leetcode_username,
        catalog,
        clock,
        limit=settings.submission_limit,
        skip_easy=settings.skip_easy,
    )

    if not problems:
        logger.info("ℹ️ No problems solved yesterday.")
        return problems

    logger.info(f"🔍 Found {len(problems)} problems solved yesterday: {problems}")
    if dry_run:
        logger.info("ℹ️ Dry run, calendar left untouched.")
        return problems

    calendar = calendar or CalendarClient.from_settings(settings)
    scheduler = ReminderScheduler(
        calendar,
        clock=clock,
        calendar_id=settings.calendar_id,
        exact_lines=settings.exact_line_match,
    )
    scheduler.schedule(problems)
    return problems


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Schedule LeetCode revision reminders on Google Calendar.")
    parser.add_argument('--dry-run', action='store_true',
                        help="Only list yesterday's problems, do not touch the calendar")
    parser.add_argument('--include-easy', action='store_true',
                        help="Also schedule Easy problems")
    parser.add_argument('--log-level', default=None,
                        help="Logging level (default: LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    if args.include_easy:
        settings.skip_easy = False
    configure_logging((args.log_level or settings.log_level).upper())

    try:
        settings.require(*LEETCODE_SETTINGS)
        if not args.dry_run:
            settings.require(*GOOGLE_SETTINGS)
        schedule_for_revision(settings, dry_run=args.dry_run)
    except ConfigError as error:
        logger.error(f"❌ {error}")
        return EXIT_FATAL
    except Exception as error:
        logger.error(f"❌ Fatal Error: {error}", exc_info=True)
        return EXIT_FATAL
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
