"""
Supabase Gym War Repository Implementation.

Reads the ``gym_war_weekly_stats`` view, which aggregates logged workouts
and XP per home gym and rotation week.
"""
from typing import Any, Dict, List
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseGymWarRepository:
    """Supabase implementation of GymWarRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_weekly_stats(
        self,
        week_index: int,
    ) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("gym_war_weekly_stats") \
                .select("gym_id, gym_name, location, total_workouts, total_xp, member_count, streak") \
                .eq("week_index", week_index) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error fetching gym war stats for week {week_index}: {e}")
            return []
