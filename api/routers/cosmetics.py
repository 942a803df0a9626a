"""
Cosmetics router.

Endpoints:
- GET  /cosmetics                  catalog with the caller's unlock state
- POST /cosmetics/{item_id}/unlock unlock an item (XP is a threshold, not spent)
- POST /cosmetics/{item_id}/equip  make an unlocked item active for its category
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from api.deps import get_cosmetic_service, get_current_user
from api.errors import http_error
from application.exceptions import GamificationError
from backend.core.cosmetic_service import CosmeticInventory, CosmeticService

router = APIRouter(
    prefix="/cosmetics",
    tags=["Cosmetics"],
)


class CosmeticResponse(BaseModel):
    id: str
    name: str
    category: str
    description: str
    xp_cost: int
    min_rank_tier: Optional[str] = None
    preview: str
    unlocked: bool
    active: bool
    unlockable: bool


class InventoryResponse(BaseModel):
    unlocked: List[str] = Field(default_factory=list)
    active: Dict[str, str] = Field(default_factory=dict)


def _inventory_response(inventory: CosmeticInventory) -> InventoryResponse:
    return InventoryResponse(unlocked=inventory.unlocked, active=inventory.active)


@router.get("", response_model=List[CosmeticResponse])
def list_cosmetics(
    user_id: str = Depends(get_current_user),
    cosmetic_service: CosmeticService = Depends(get_cosmetic_service),
):
    try:
        views = cosmetic_service.list_for_user(user_id)
    except GamificationError as e:
        raise http_error(e)

    return [
        CosmeticResponse(
            id=v.item.id,
            name=v.item.name,
            category=v.item.category.value,
            description=v.item.description,
            xp_cost=v.item.xp_cost,
            min_rank_tier=v.item.min_rank_tier.value if v.item.min_rank_tier else None,
            preview=v.item.preview,
            unlocked=v.unlocked,
            active=v.active,
            unlockable=v.unlockable,
        )
        for v in views
    ]


@router.post("/{item_id}/unlock", response_model=InventoryResponse)
def unlock_cosmetic(
    item_id: str = Path(..., description="Cosmetic item ID"),
    user_id: str = Depends(get_current_user),
    cosmetic_service: CosmeticService = Depends(get_cosmetic_service),
):
    """Unlock an item. Returns 403 when the XP or rank gate is not met."""
    try:
        return _inventory_response(cosmetic_service.unlock(user_id, item_id))
    except GamificationError as e:
        raise http_error(e)


@router.post("/{item_id}/equip", response_model=InventoryResponse)
def equip_cosmetic(
    item_id: str = Path(..., description="Cosmetic item ID"),
    user_id: str = Depends(get_current_user),
    cosmetic_service: CosmeticService = Depends(get_cosmetic_service),
):
    try:
        return _inventory_response(cosmetic_service.equip(user_id, item_id))
    except GamificationError as e:
        raise http_error(e)
