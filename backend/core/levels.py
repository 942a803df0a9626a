"""
XP levels and the XP reward table.

XP is earned from workouts, quests, duels and personal records. The level
ladder is separate from the lift-based rank: levels measure activity,
ranks measure strength.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Level:
    """A rung of the XP ladder."""
    name: str
    min_xp: int
    icon: str
    color: str


LEVELS: Tuple[Level, ...] = (
    Level("Rookie", 0, "🥉", "#9CA3AF"),
    Level("Iron", 500, "🏋️", "#6B7280"),
    Level("Steel", 1500, "⚔️", "#3B82F6"),
    Level("Titanium", 3000, "💎", "#8B5CF6"),
    Level("Diamond", 6000, "👑", "#F59E0B"),
    Level("Legend", 10000, "🔥", "#EF4444"),
)

# XP rewards
XP_REWARDS = {
    "COMPLETE_WORKOUT": 100,
    "COMPLETE_QUEST": 75,
    "WIN_DUEL": 150,
    "LOSE_DUEL": 25,  # consolation XP, also granted to both sides on a draw
    "POST_COMMUNITY": 10,
    "STREAK_BONUS": 50,  # per day of streak
    "FIRST_WORKOUT_DAY": 25,
    "PERSONAL_RECORD": 500,
}


def get_level(xp: int) -> Level:
    """Highest level whose threshold is at or below ``xp``."""
    for level in reversed(LEVELS):
        if xp >= level.min_xp:
            return level
    return LEVELS[0]


def get_next_level(xp: int) -> Optional[Level]:
    current = get_level(xp)
    idx = LEVELS.index(current)
    return LEVELS[idx + 1] if idx < len(LEVELS) - 1 else None


def get_level_progress(xp: int) -> float:
    """Percent of the way from the current level to the next, in [0, 100]."""
    current = get_level(xp)
    nxt = get_next_level(xp)
    if nxt is None:
        return 100.0
    percent = (xp - current.min_xp) / (nxt.min_xp - current.min_xp) * 100
    return max(0.0, min(100.0, percent))
