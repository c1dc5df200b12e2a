"""Tests for the end-to-end revision job."""

import logging
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

import revision_tracker
from revision.clock import IST
from revision.config import Settings
from revision.leetcode_client import EXIT_AUTH_FAILED
from revision.models import Submission

YESTERDAY_NOON = int(datetime(2025, 1, 9, 12, 0, tzinfo=IST).timestamp())


@pytest.fixture
def settings():
    return Settings(
        leetcode_session_cookie="session",
        leetcode_csrf_token="csrf",
        leetcode_username="user",
        google_client_id="id",
        google_client_secret="secret",
        google_refresh_token="refreshToken",
    )


def make_leetcode(catalog, submissions):
    leetcode = MagicMock()
    leetcode.fetch_catalog.return_value = catalog
    leetcode.fetch_recent_submissions.return_value = submissions
    return leetcode


def test_full_flow_schedules_reminders(settings, clock, catalog):
    leetcode = make_leetcode(catalog, [
        Submission("Add Two Numbers", "add-two-numbers", YESTERDAY_NOON),
        Submission("Add Two Numbers", "add-two-numbers", YESTERDAY_NOON - 30),
    ])
    calendar = MagicMock()
    calendar.search_events.return_value = []

    problems = revision_tracker.schedule_for_revision(settings, clock=clock, leetcode=leetcode, calendar=calendar)

    assert problems == ["2. Add Two Numbers (Medium)"]
    leetcode.fetch_recent_submissions.assert_called_once_with("user", 50)
    assert calendar.search_events.call_count == 3
    assert calendar.create_event.call_count == 3


def test_missing_catalog_falls_back_to_titles(settings, clock):
    leetcode = make_leetcode(None, [Submission("Two Sum", "two-sum", YESTERDAY_NOON)])
    calendar = MagicMock()
    calendar.search_events.return_value = []

    problems = revision_tracker.schedule_for_revision(settings, clock=clock, leetcode=leetcode, calendar=calendar)

    assert problems == ["Two Sum"]


@patch("revision_tracker.CalendarClient")
def test_nothing_solved_makes_no_calendar_calls(mock_calendar_cls, settings, clock, catalog, caplog):
    caplog.set_level(logging.INFO)
    leetcode = make_leetcode(catalog, [])

    problems = revision_tracker.schedule_for_revision(settings, clock=clock, leetcode=leetcode)

    assert problems == []
    mock_calendar_cls.assert_not_called()
    mock_calendar_cls.from_settings.assert_not_called()
    assert "ℹ️ No problems solved yesterday." in caplog.text


@patch("revision_tracker.CalendarClient")
def test_dry_run_leaves_calendar_alone(mock_calendar_cls, settings, clock, catalog):
    leetcode = make_leetcode(catalog, [Submission("Add Two Numbers", "add-two-numbers", YESTERDAY_NOON)])

    problems = revision_tracker.schedule_for_revision(settings, clock=clock, leetcode=leetcode, dry_run=True)

    assert problems == ["2. Add Two Numbers (Medium)"]
    mock_calendar_cls.from_settings.assert_not_called()


@patch("revision_tracker.schedule_for_revision")
@patch("revision_tracker.Settings.from_env")
def test_main_returns_zero_on_success(mock_from_env, mock_schedule, settings):
    mock_from_env.return_value = settings

    assert revision_tracker.main([]) == revision_tracker.EXIT_OK
    mock_schedule.assert_called_once_with(settings, dry_run=False)


@patch("revision_tracker.schedule_for_revision")
@patch("revision_tracker.Settings.from_env")
def test_main_maps_fatal_errors_to_exit_code(mock_from_env, mock_schedule, settings, caplog):
    mock_from_env.return_value = settings
    mock_schedule.side_effect = RuntimeError("boom")

    assert revision_tracker.main([]) == revision_tracker.EXIT_FATAL
    assert "❌ Fatal Error: boom" in caplog.text


@patch("revision_tracker.schedule_for_revision")
@patch("revision_tracker.Settings.from_env")
def test_main_lets_auth_failure_exit_through(mock_from_env, mock_schedule, settings):
    mock_from_env.return_value = settings
    mock_schedule.side_effect = SystemExit(EXIT_AUTH_FAILED)

    with pytest.raises(SystemExit) as exc_info:
        revision_tracker.main([])

    assert exc_info.value.code == EXIT_AUTH_FAILED


@patch("revision_tracker.schedule_for_revision")
@patch("revision_tracker.Settings.from_env")
def test_main_rejects_missing_configuration(mock_from_env, mock_schedule, caplog):
    mock_from_env.return_value = Settings(leetcode_username="user")

    assert revision_tracker.main([]) == revision_tracker.EXIT_FATAL
    mock_schedule.assert_not_called()
    assert "LEETCODE_SESSION_COOKIE" in caplog.text


@patch("revision_tracker.schedule_for_revision")
@patch("revision_tracker.Settings.from_env")
def test_main_flags(mock_from_env, mock_schedule, settings):
    mock_from_env.return_value = settings

    assert revision_tracker.main(["--dry-run", "--include-easy"]) == revision_tracker.EXIT_OK
    assert settings.skip_easy is False
    mock_schedule.assert_called_once_with(settings, dry_run=True)
