"""
Fake Clock for Testing.

A manually advanced clock so deadline tests are exact.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional


DEFAULT_NOW = datetime(2025, 3, 3, 12, 0, tzinfo=timezone.utc)  # a Monday


class FakeClock:
    """Clock whose time only moves when the test moves it."""

    def __init__(self, now: Optional[datetime] = None):
        self._now = now or DEFAULT_NOW

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, delta: timedelta) -> datetime:
        self._now = self._now + delta
        return self._now
