"""
Spaced-repetition reminders for LeetCode problems solved yesterday.
"""

from .models import CalendarEvent, Difficulty, ProblemRecord, ReminderResult, Submission

__all__ = ["CalendarEvent", "Difficulty", "ProblemRecord", "ReminderResult", "Submission"]
