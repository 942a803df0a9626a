"""
Cosmetic catalog entries.

Cosmetics are non-functional profile decorations. An item is gated by an
XP threshold and optionally by a minimum rank tier.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from domain.models.rank import RankTier


class CosmeticCategory(str, Enum):
    """Display category; one item per category can be active."""

    FRAME = "frame"
    COLOR = "color"


class CosmeticItem(BaseModel):
    """Immutable cosmetic catalog entry."""

    id: str = Field(..., min_length=1)
    name: str
    category: CosmeticCategory
    description: str = ""
    xp_cost: int = Field(..., ge=0, description="XP required to unlock")
    min_rank_tier: Optional[RankTier] = Field(
        default=None,
        description="Lowest rank tier allowed to unlock the item",
    )
    preview: str = Field(default="", description="Preview descriptor for the client")

    model_config = {"frozen": True}
