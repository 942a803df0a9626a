"""
Clock Interface (Port).

Duel expiry and weekly quest rotation are evaluated against the current
time; injecting the clock keeps those computations deterministic in tests.
"""
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime."""
        ...
