"""Shared fixtures: a clock frozen at 2025-01-10 15:30 IST."""

from datetime import datetime, timezone

import pytest

from revision.clock import Clock
from revision.models import ProblemRecord

FROZEN_NOW = datetime(2025, 1, 10, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return Clock(now_func=lambda: FROZEN_NOW)


@pytest.fixture
def catalog():
    return {
        "two-sum": ProblemRecord("two-sum", "1", "Easy"),
        "add-two-numbers": ProblemRecord("add-two-numbers", "2", "Medium"),
        "longest-palindromic-substring": ProblemRecord("longest-palindromic-substring", "5", "Hard"),
    }
