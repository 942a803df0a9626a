"""
Quest Progress Repository Interface (Port).

Defines the contract for per-user quest state: accumulated progress per
quest, the set of completed quests (guards the XP grant) and the set of
revealed hidden quests.
"""
from datetime import datetime
from typing import Dict, Protocol, Set


class QuestProgressRepository(Protocol):
    """Abstract interface for quest progress persistence."""

    def get_progress(
        self,
        user_id: str,
    ) -> Dict[str, float]:
        """
        Get accumulated progress for every quest the user has touched.

        Returns:
            Mapping of quest id -> progress (missing quests have 0)
        """
        ...

    def increment(
        self,
        user_id: str,
        quest_id: str,
        amount: float,
    ) -> float:
        """
        Add ``amount`` to a quest's progress.

        Returns:
            The new accumulated progress
        """
        ...

    def get_completed(
        self,
        user_id: str,
    ) -> Set[str]:
        """Quest ids whose reward has already been granted."""
        ...

    def mark_completed(
        self,
        user_id: str,
        quest_id: str,
    ) -> bool:
        """
        Record a quest as completed.

        The write is conditional on the stored flag still being unset, so
        of two concurrent calls only one returns True.

        Returns:
            True if the quest was newly marked, False if it already was
        """
        ...

    def get_revealed(
        self,
        user_id: str,
    ) -> Set[str]:
        """Hidden quest ids the user has revealed."""
        ...

    def mark_revealed(
        self,
        user_id: str,
        quest_id: str,
        revealed_at: datetime,
    ) -> bool:
        """
        Record a hidden quest as revealed.

        Args:
            user_id: User ID
            quest_id: Hidden quest ID
            revealed_at: Time of the reveal

        Returns:
            True if newly revealed, False if it already was
        """
        ...
