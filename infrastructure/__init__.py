"""
Infrastructure Layer for the IronMatch Arena API.

Concrete implementations of the application ports:
- db/: Supabase repositories
- clock: system clock
"""

from infrastructure.clock import SystemClock
from infrastructure.db import (
    SupabaseProfileRepository,
    SupabaseQuestProgressRepository,
    SupabaseDuelRepository,
    SupabaseGymWarRepository,
)

__all__ = [
    "SystemClock",
    "SupabaseProfileRepository",
    "SupabaseQuestProgressRepository",
    "SupabaseDuelRepository",
    "SupabaseGymWarRepository",
]
