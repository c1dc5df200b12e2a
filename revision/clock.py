"""
Time provider pinned to Indian Standard Time.

Every "now" in the project goes through a Clock so tests can freeze it.
"""

from datetime import date, datetime, time, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

IST = ZoneInfo("Asia/Kolkata")


class Clock:
    def __init__(self, tz: ZoneInfo = IST, now_func: Optional[Callable[[], datetime]] = None):
        self.tz = tz
        self._now_func = now_func

    def now(self) -> datetime:
        """Current time, converted to the clock's time zone."""
        if self._now_func is None:
            return datetime.now(self.tz)
        current = self._now_func()
        if current.tzinfo is None:
            current = current.replace(tzinfo=self.tz)
        return current.astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()

    def start_of_today(self) -> datetime:
        return datetime.combine(self.today(), time(0, 0), tzinfo=self.tz)

    def start_of_yesterday(self) -> datetime:
        # Calendar arithmetic on the date, not "midnight minus 24 hours"
        return datetime.combine(self.today() - timedelta(days=1), time(0, 0), tzinfo=self.tz)

    def yesterday_at(self, hour: int, minute: int) -> datetime:
        """Yesterday's date at a fixed local wall-clock time."""
        return datetime.combine(self.today() - timedelta(days=1), time(hour, minute), tzinfo=self.tz)
