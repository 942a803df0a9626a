"""
Router package for the IronMatch Arena API.

This package contains all API routers organized by domain:
- health: Health check
- ranks: Rank ladder, caller's rank, ad-hoc rank evaluation
- profile: Caller's lifts and personal records
- strength: Relative strength and duel fairness calculators
- quests: Weekly rotation, progress and hidden quests
- duels: Duel lifecycle
- cosmetics: Cosmetic unlocks and selections
- leaderboard: Gym Wars standings
"""

from api.routers.health import router as health_router
from api.routers.ranks import router as ranks_router
from api.routers.profile import router as profile_router
from api.routers.strength import router as strength_router
from api.routers.quests import router as quests_router
from api.routers.duels import router as duels_router
from api.routers.cosmetics import router as cosmetics_router
from api.routers.leaderboard import router as leaderboard_router

__all__ = [
    "health_router",
    "ranks_router",
    "profile_router",
    "strength_router",
    "quests_router",
    "duels_router",
    "cosmetics_router",
    "leaderboard_router",
]
