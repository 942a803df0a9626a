"""
Domain layer for the IronMatch Arena API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    BodyMetrics,
    CosmeticItem,
    Duel,
    GymWarEntry,
    LiftProfile,
    Quest,
    Rank,
)

__all__ = [
    "BodyMetrics",
    "CosmeticItem",
    "Duel",
    "GymWarEntry",
    "LiftProfile",
    "Quest",
    "Rank",
]
