"""
Fake Quest Progress Repository for Testing.

In-memory implementation of QuestProgressRepository.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, Set


class FakeQuestProgressRepository:
    """In-memory fake implementation of QuestProgressRepository."""

    def __init__(self):
        """Initialize with empty storage."""
        # Map: user_id -> quest_id -> progress
        self._progress: Dict[str, Dict[str, float]] = defaultdict(dict)
        self._completed: Dict[str, Set[str]] = defaultdict(set)
        self._revealed: Dict[str, Set[str]] = defaultdict(set)
        self.revealed_at: Dict[str, Dict[str, datetime]] = defaultdict(dict)

    def reset(self) -> None:
        """Clear all stored data."""
        self._progress.clear()
        self._completed.clear()
        self._revealed.clear()
        self.revealed_at.clear()

    def seed_progress(self, user_id: str, progress: Dict[str, float]) -> None:
        self._progress[user_id].update(progress)

    def get_progress(
        self,
        user_id: str,
    ) -> Dict[str, float]:
        return dict(self._progress.get(user_id, {}))

    def increment(
        self,
        user_id: str,
        quest_id: str,
        amount: float,
    ) -> float:
        progress = self._progress[user_id].get(quest_id, 0.0) + amount
        self._progress[user_id][quest_id] = progress
        return progress

    def get_completed(
        self,
        user_id: str,
    ) -> Set[str]:
        return set(self._completed.get(user_id, set()))

    def mark_completed(
        self,
        user_id: str,
        quest_id: str,
    ) -> bool:
        if quest_id in self._completed[user_id]:
            return False
        self._completed[user_id].add(quest_id)
        return True

    def get_revealed(
        self,
        user_id: str,
    ) -> Set[str]:
        return set(self._revealed.get(user_id, set()))

    def mark_revealed(
        self,
        user_id: str,
        quest_id: str,
        revealed_at: datetime,
    ) -> bool:
        if quest_id in self._revealed[user_id]:
            return False
        self._revealed[user_id].add(quest_id)
        self.revealed_at[user_id][quest_id] = revealed_at
        return True
