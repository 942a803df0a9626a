"""
Rank catalog entries.

Ranks are derived from a LiftProfile on demand and never stored. Each rank
belongs to a coarse tier; tiers are ordered below_average < average <
above_average and that order is what cosmetic rank gates compare against.
"""

from enum import Enum

from pydantic import BaseModel, Field


class RankTier(str, Enum):
    """Coarse classification grouping several named ranks."""

    BELOW_AVERAGE = "below_average"
    AVERAGE = "average"
    ABOVE_AVERAGE = "above_average"


# Catalog order of tiers, lowest first
TIER_ORDER = (
    RankTier.BELOW_AVERAGE,
    RankTier.AVERAGE,
    RankTier.ABOVE_AVERAGE,
)


class Rank(BaseModel):
    """
    Immutable rank catalog entry.

    ``min_total_lb`` is the minimum Big 4 total (in pounds) needed to hold
    the rank.
    """

    name: str = Field(..., min_length=1)
    tier: RankTier
    icon: str = ""
    color: str = ""
    min_total_lb: float = Field(..., ge=0)
    description: str = ""

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.icon} {self.name}".strip()
