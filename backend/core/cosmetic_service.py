"""
Cosmetic Unlock Gate and Cosmetic Service.

Unlocks are gated by XP and optionally by rank tier. XP acts as a
permanent threshold: unlocking never deducts it. Unlocks are one-way.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from application.exceptions import InsufficientResource, InvalidInput, NotFound
from application.ports import ProfileRepository
from backend.core import catalog
from backend.core.profile_service import lift_profile_from_row
from backend.core.rank_engine import get_rank, tier_at_least
from domain.models import CosmeticItem, RankTier

logger = logging.getLogger(__name__)


def can_unlock(item: CosmeticItem, current_xp: int, current_rank_tier: RankTier) -> bool:
    """
    XP and rank gate for a cosmetic item.

    Args:
        item: Catalog item
        current_xp: The user's XP balance
        current_rank_tier: Tier of the user's current rank

    Returns:
        False if XP is below the item cost or the tier is below the item's
        minimum tier, True otherwise
    """
    if current_xp < item.xp_cost:
        return False
    if item.min_rank_tier is not None and not tier_at_least(current_rank_tier, item.min_rank_tier):
        return False
    return True


@dataclass
class CosmeticView:
    """A catalog item with the user's unlock state."""
    item: CosmeticItem
    unlocked: bool
    active: bool
    unlockable: bool


@dataclass
class CosmeticInventory:
    """The user's unlocked set and active selections."""
    unlocked: List[str] = field(default_factory=list)
    active: Dict[str, str] = field(default_factory=dict)


class CosmeticService:
    """Service for unlocking and equipping cosmetics."""

    def __init__(self, profile_repo: ProfileRepository):
        self._profile_repo = profile_repo

    def _get_item(self, item_id: str) -> CosmeticItem:
        item = catalog.get_cosmetic(item_id)
        if item is None:
            raise NotFound(f"Cosmetic '{item_id}' not found")
        return item

    def _get_profile(self, user_id: str) -> dict:
        row = self._profile_repo.get_profile(user_id)
        if not row:
            raise NotFound(f"Profile {user_id} not found")
        return row

    def list_for_user(self, user_id: str) -> List[CosmeticView]:
        """Every catalog item with unlocked/active/unlockable flags."""
        row = self._get_profile(user_id)
        xp = int(row.get("xp") or 0)
        tier = get_rank(lift_profile_from_row(row)).tier
        unlocked = set(row.get("unlocked_cosmetics") or [])
        active = set((row.get("active_cosmetics") or {}).values())

        return [
            CosmeticView(
                item=item,
                unlocked=item.id in unlocked,
                active=item.id in active,
                unlockable=item.id not in unlocked and can_unlock(item, xp, tier),
            )
            for item in catalog.load_cosmetics()
        ]

    def unlock(self, user_id: str, item_id: str) -> CosmeticInventory:
        """
        Add an item to the user's unlocked set.

        Unlocking an item that is already unlocked is a no-op.

        Raises:
            NotFound: unknown item or profile
            InsufficientResource: XP or rank gate not met
        """
        item = self._get_item(item_id)
        row = self._get_profile(user_id)
        unlocked = list(row.get("unlocked_cosmetics") or [])
        active = dict(row.get("active_cosmetics") or {})

        if item.id in unlocked:
            return CosmeticInventory(unlocked=unlocked, active=active)

        xp = int(row.get("xp") or 0)
        tier = get_rank(lift_profile_from_row(row)).tier
        if not can_unlock(item, xp, tier):
            logger.warning(
                "User %s cannot unlock %s (xp=%d, tier=%s)", user_id, item.id, xp, RankTier(tier).value,
            )
            if xp < item.xp_cost:
                raise InsufficientResource(f"'{item.name}' requires {item.xp_cost} XP, you have {xp}")
            raise InsufficientResource(
                f"'{item.name}' requires rank tier {item.min_rank_tier.value} or higher"
            )

        unlocked = self._profile_repo.add_unlocked_cosmetic(user_id, item.id)
        logger.info("User %s unlocked cosmetic %s", user_id, item.id)
        return CosmeticInventory(unlocked=unlocked, active=active)

    def equip(self, user_id: str, item_id: str) -> CosmeticInventory:
        """
        Make an unlocked item the active one of its category.

        Raises:
            NotFound: unknown item or profile
            InvalidInput: the item is not unlocked
        """
        item = self._get_item(item_id)
        row = self._get_profile(user_id)
        unlocked = list(row.get("unlocked_cosmetics") or [])
        if item.id not in unlocked:
            raise InvalidInput(f"'{item.name}' is not unlocked")

        active = self._profile_repo.set_active_cosmetic(user_id, item.category.value, item.id)
        logger.info("User %s equipped %s %s", user_id, item.category.value, item.id)
        return CosmeticInventory(unlocked=unlocked, active=active)
