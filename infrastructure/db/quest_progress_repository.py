"""
Supabase Quest Progress Repository Implementation.

Implements the QuestProgressRepository protocol using two tables:
- quest_progress: (user_id, quest_id) -> progress, completed
- quest_states: (user_id, quest_id, revealed_at) for revealed hidden quests
"""
from datetime import datetime
from typing import Dict, Set
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseQuestProgressRepository:
    """Supabase implementation of QuestProgressRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def _get_row(self, user_id: str, quest_id: str):
        result = self._client.table("quest_progress") \
            .select("progress, completed") \
            .eq("user_id", user_id) \
            .eq("quest_id", quest_id) \
            .limit(1) \
            .execute()
        return result.data[0] if result.data else None

    def get_progress(
        self,
        user_id: str,
    ) -> Dict[str, float]:
        """Accumulated progress per quest id."""
        try:
            result = self._client.table("quest_progress") \
                .select("quest_id, progress") \
                .eq("user_id", user_id) \
                .execute()
            return {row["quest_id"]: float(row.get("progress") or 0) for row in result.data or []}
        except Exception as e:
            logger.error(f"Error fetching quest progress for {user_id}: {e}")
            return {}

    def increment(
        self,
        user_id: str,
        quest_id: str,
        amount: float,
    ) -> float:
        """Add to a quest's progress, creating the row on first use."""
        try:
            row = self._get_row(user_id, quest_id)
            progress = float((row or {}).get("progress") or 0) + amount
            self._client.table("quest_progress") \
                .upsert(
                    {"user_id": user_id, "quest_id": quest_id, "progress": progress},
                    on_conflict="user_id,quest_id",
                ) \
                .execute()
            return progress
        except Exception:
            logger.exception(f"Error incrementing quest {quest_id} for {user_id}")
            raise

    def get_completed(
        self,
        user_id: str,
    ) -> Set[str]:
        try:
            result = self._client.table("quest_progress") \
                .select("quest_id") \
                .eq("user_id", user_id) \
                .eq("completed", True) \
                .execute()
            return {row["quest_id"] for row in result.data or []}
        except Exception as e:
            logger.error(f"Error fetching completed quests for {user_id}: {e}")
            return set()

    def mark_completed(
        self,
        user_id: str,
        quest_id: str,
    ) -> bool:
        """Set the completed flag; False if it was already set."""
        try:
            result = self._client.table("quest_progress") \
                .update({"completed": True}) \
                .eq("user_id", user_id) \
                .eq("quest_id", quest_id) \
                .eq("completed", False) \
                .execute()
            if result.data:
                return True
            if self._get_row(user_id, quest_id):
                return False

            result = self._client.table("quest_progress") \
                .upsert(
                    {"user_id": user_id, "quest_id": quest_id, "progress": 0.0, "completed": True},
                    on_conflict="user_id,quest_id",
                    ignore_duplicates=True,
                ) \
                .execute()
            return bool(result.data)
        except Exception:
            logger.exception(f"Error completing quest {quest_id} for {user_id}")
            raise

    def get_revealed(
        self,
        user_id: str,
    ) -> Set[str]:
        try:
            result = self._client.table("quest_states") \
                .select("quest_id") \
                .eq("user_id", user_id) \
                .execute()
            return {row["quest_id"] for row in result.data or []}
        except Exception as e:
            logger.error(f"Error fetching revealed quests for {user_id}: {e}")
            return set()

    def mark_revealed(
        self,
        user_id: str,
        quest_id: str,
        revealed_at: datetime,
    ) -> bool:
        """Insert the reveal row; False if the quest was already revealed."""
        try:
            if quest_id in self.get_revealed(user_id):
                return False
            self._client.table("quest_states") \
                .insert({
                    "user_id": user_id,
                    "quest_id": quest_id,
                    "revealed_at": revealed_at.isoformat(),
                }) \
                .execute()
            return True
        except Exception:
            logger.exception(f"Error revealing quest {quest_id} for {user_id}")
            raise
