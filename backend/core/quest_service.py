"""
Quest Service: weekly rotation, progress and hidden quest reveals.

The weekly rotation is a pure function of the current time, so every client
sees the same five quests for a given week without any stored state. Per-user
progress, completion and reveal sets live behind the QuestProgressRepository.
"""
import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from application.exceptions import InvalidInput, NotFound
from application.ports import Clock, ProfileRepository, QuestProgressRepository
from backend.core import catalog
from domain.models import Quest, QuestReveal, QuestTrigger

logger = logging.getLogger(__name__)


# Monday 1970-01-05 00:00 UTC; weeks roll over at Monday midnight UTC
ROTATION_EPOCH = datetime(1970, 1, 5, tzinfo=timezone.utc)
WEEKLY_QUEST_COUNT = 5
_SECONDS_PER_WEEK = 7 * 24 * 60 * 60


# =============================================================================
# Weekly Rotation
# =============================================================================


def week_index(now: datetime) -> int:
    """
    Whole weeks elapsed since the rotation epoch.

    Naive datetimes are treated as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int((now - ROTATION_EPOCH).total_seconds() // _SECONDS_PER_WEEK)


def rotation_key(week: int, quest_id: str) -> int:
    """Stable hash of (week, quest id); the same on every process and platform."""
    digest = hashlib.sha256(f"{week}:{quest_id}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def get_active_weekly_quests(
    now: datetime,
    count: int = WEEKLY_QUEST_COUNT,
    pool: Optional[Sequence[Quest]] = None,
) -> List[Quest]:
    """
    The public quests active in the week containing ``now``.

    The pool is ordered by rotation_key, ties broken by quest id, and the
    first ``count`` entries are returned.

    Args:
        now: Current time
        count: Number of quests to select
        pool: Quest pool, defaults to the public catalog

    Returns:
        Up to ``count`` distinct public quests
    """
    if pool is None:
        pool = catalog.public_quests()
    week = week_index(now)
    ordered = sorted(pool, key=lambda q: (rotation_key(week, q.id), q.id))
    return ordered[:count]


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class UserQuest:
    """A quest as one user sees it."""
    quest: Quest
    display: QuestReveal
    progress: float
    completed: bool
    revealed: bool

    @property
    def percent(self) -> float:
        return min(100.0, self.progress / self.quest.target * 100)


@dataclass
class QuestProgressResult:
    """Outcome of a progress increment."""
    quest_id: str
    progress: float
    target: float
    completed: bool
    xp_awarded: int = 0


@dataclass
class UserQuestBoard:
    """Weekly quests and the hidden pool for one user."""
    week: int
    weekly: List[UserQuest]
    hidden: List[UserQuest]


# =============================================================================
# Quest Service
# =============================================================================


class QuestService:
    """
    Service for per-user quest progress.

    Completion grants the quest's XP reward exactly once: the completed set
    in the repository is the guard, so repeated evaluations never pay out
    twice.
    """

    def __init__(
        self,
        progress_repo: QuestProgressRepository,
        profile_repo: ProfileRepository,
        clock: Clock,
    ):
        """
        Initialize the quest service.

        Args:
            progress_repo: Repository for quest progress persistence
            profile_repo: Repository used to grant XP
            clock: Source of reveal timestamps
        """
        self._progress_repo = progress_repo
        self._profile_repo = profile_repo
        self._clock = clock

    def _get_quest(self, quest_id: str) -> Quest:
        quest = catalog.get_quest(quest_id)
        if quest is None:
            raise NotFound(f"Quest '{quest_id}' not found")
        return quest

    def increment_progress(
        self,
        user_id: str,
        quest_id: str,
        amount: float,
    ) -> QuestProgressResult:
        """
        Add progress to a quest and evaluate completion.

        Raises:
            InvalidInput: non-positive amount, or a hidden quest not yet revealed
            NotFound: unknown quest id
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not amount > 0:
            raise InvalidInput("Progress amount must be a positive number")

        quest = self._get_quest(quest_id)
        if quest.hidden and quest.id not in self._progress_repo.get_revealed(user_id):
            logger.warning("User %s sent progress for unrevealed hidden quest %s", user_id, quest_id)
            raise InvalidInput(f"Quest '{quest_id}' has not been revealed")

        progress = self._progress_repo.increment(user_id, quest.id, float(amount))
        xp_awarded = self.evaluate_completion(user_id, quest.id, progress=progress)

        return QuestProgressResult(
            quest_id=quest.id,
            progress=progress,
            target=quest.target,
            completed=quest.is_complete(progress),
            xp_awarded=xp_awarded,
        )

    def evaluate_completion(
        self,
        user_id: str,
        quest_id: str,
        progress: Optional[float] = None,
    ) -> int:
        """
        Mark the quest completed and grant its XP if progress has reached the target.

        Args:
            user_id: User ID
            quest_id: Quest ID
            progress: Known current progress, read from the repository if omitted

        Returns:
            XP granted by this call (0 when incomplete or already rewarded)
        """
        quest = self._get_quest(quest_id)
        if progress is None:
            progress = self._progress_repo.get_progress(user_id).get(quest.id, 0.0)

        if not quest.is_complete(progress):
            return 0
        if not self._progress_repo.mark_completed(user_id, quest.id):
            return 0

        balance = self._profile_repo.add_xp(user_id, quest.xp_reward)
        logger.info(
            "User %s completed quest %s (+%d XP, balance %d)",
            user_id, quest.id, quest.xp_reward, balance,
        )
        return quest.xp_reward

    def reveal_hidden_quest(self, user_id: str, quest_id: str) -> bool:
        """
        Reveal a hidden quest for a user. One-way.

        Returns:
            True if newly revealed, False if it already was

        Raises:
            NotFound: unknown quest id
            InvalidInput: the quest is public
        """
        quest = self._get_quest(quest_id)
        if not quest.hidden:
            raise InvalidInput(f"Quest '{quest_id}' is not a hidden quest")

        newly = self._progress_repo.mark_revealed(user_id, quest.id, self._clock.now())
        if newly:
            logger.info("User %s revealed hidden quest %s", user_id, quest.id)
        return newly

    def handle_achievement(self, user_id: str, trigger: str) -> List[Quest]:
        """
        React to an external achievement event.

        Reveals every hidden quest tied to ``trigger`` that the user has not
        revealed yet.

        Returns:
            The quests revealed by this event
        """
        try:
            trigger = QuestTrigger(trigger)
        except ValueError:
            valid = ", ".join(t.value for t in QuestTrigger)
            raise InvalidInput(f"Unknown achievement trigger '{trigger}'. Must be one of: {valid}")

        revealed = []
        for quest in catalog.hidden_quests():
            if quest.trigger == trigger and self.reveal_hidden_quest(user_id, quest.id):
                revealed.append(quest)
        return revealed

    def get_user_quests(self, user_id: str, now: datetime) -> UserQuestBoard:
        """This week's quests and the hidden pool with the user's progress."""
        progress = self._progress_repo.get_progress(user_id)
        completed = self._progress_repo.get_completed(user_id)
        revealed = self._progress_repo.get_revealed(user_id)

        def view(quest: Quest) -> UserQuest:
            is_revealed = quest.id in revealed
            return UserQuest(
                quest=quest,
                display=quest.display(is_revealed),
                progress=progress.get(quest.id, 0.0),
                completed=quest.id in completed,
                revealed=is_revealed,
            )

        return UserQuestBoard(
            week=week_index(now),
            weekly=[view(q) for q in get_active_weekly_quests(now)],
            hidden=[view(q) for q in catalog.hidden_quests()],
        )
