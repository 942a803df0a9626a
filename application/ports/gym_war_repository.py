"""
Gym War Repository Interface (Port).

Provides the weekly per-gym activity totals the leaderboard is built from.
"""
from typing import Any, Dict, List, Protocol


class GymWarRepository(Protocol):
    """Abstract interface for weekly gym statistics."""

    def get_weekly_stats(
        self,
        week_index: int,
    ) -> List[Dict[str, Any]]:
        """
        Get per-gym totals for a rotation week.

        Args:
            week_index: Whole weeks since the rotation epoch

        Returns:
            List of dicts with gym_id, gym_name, location, total_workouts,
            total_xp, member_count, streak
        """
        ...
