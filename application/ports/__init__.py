"""
Repository Interfaces (Ports) for the IronMatch Arena API.

This package defines abstract interfaces that decouple the gamification
engine from infrastructure (database, clock). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import DuelRepository, Clock

    class DuelService:
        def __init__(self, duel_repo: DuelRepository, clock: Clock):
            self._duel_repo = duel_repo
            self._clock = clock
"""

# Profile (lifts, body metrics, XP, cosmetics)
from application.ports.profile_repository import ProfileRepository

# Quest progress
from application.ports.quest_progress_repository import QuestProgressRepository

# Duels
from application.ports.duel_repository import DuelRepository

# Gym Wars
from application.ports.gym_war_repository import GymWarRepository

# Time source
from application.ports.clock import Clock

__all__ = [
    "ProfileRepository",
    "QuestProgressRepository",
    "DuelRepository",
    "GymWarRepository",
    "Clock",
]
