"""
Domain models for the IronMatch Arena API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core gamification concepts:
- LiftProfile / BodyMetrics: a user's Big 4 maxima and bodyweight
- Rank: lift-total rank catalog entry and its tier
- Quest: public and hidden quest catalog entries
- Duel: head-to-head challenge aggregate and its transition table
- CosmeticItem: XP/rank gated profile decoration
- GymWarEntry: weekly gym-vs-gym standing

Usage:
    >>> from domain.models import LiftProfile, Duel

    >>> profile = LiftProfile(bench=185, squat=225, deadlift=275, ohp=95)
    >>> profile.total_lb()
    780.0
"""

from domain.models.cosmetic import CosmeticCategory, CosmeticItem
from domain.models.duel import (
    ACCEPTANCE_WINDOW,
    COMPLETION_WINDOW,
    DUEL_TRANSITIONS,
    Duel,
    DuelProof,
    DuelResult,
    DuelSide,
    DuelStatus,
    DuelTemplate,
    DuelType,
    can_transition,
)
from domain.models.gym_war import GymWarEntry
from domain.models.lift_profile import (
    LB_TO_KG,
    BodyMetrics,
    LiftName,
    LiftProfile,
    WeightUnit,
)
from domain.models.quest import (
    HIDDEN_PLACEHOLDER,
    Quest,
    QuestCategory,
    QuestReveal,
    QuestTrigger,
)
from domain.models.rank import TIER_ORDER, Rank, RankTier

__all__ = [
    # Main entities
    "LiftProfile",
    "BodyMetrics",
    "Rank",
    "Quest",
    "QuestReveal",
    "Duel",
    "DuelProof",
    "DuelTemplate",
    "CosmeticItem",
    "GymWarEntry",
    # Enums
    "WeightUnit",
    "LiftName",
    "RankTier",
    "QuestCategory",
    "QuestTrigger",
    "DuelType",
    "DuelStatus",
    "DuelResult",
    "DuelSide",
    "CosmeticCategory",
    # Constants
    "LB_TO_KG",
    "TIER_ORDER",
    "HIDDEN_PLACEHOLDER",
    "ACCEPTANCE_WINDOW",
    "COMPLETION_WINDOW",
    "DUEL_TRANSITIONS",
    "can_transition",
]
