"""
Profile router for the caller's lifts and personal records.

Endpoints:
- GET  /profile/me          lifts, body metrics, rank, XP and cosmetics
- PUT  /profile/me/lifts    explicit edit of the Big 4 maxima
- POST /profile/me/records  report a lift; stored only if it is a new PR
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_profile_service
from api.errors import http_error
from api.routers.ranks import RankSummaryResponse, rank_summary_response
from application.exceptions import GamificationError
from backend.core.profile_service import (
    ProfileService,
    body_metrics_from_row,
    lift_profile_from_row,
)
from domain.models import LiftName, Rank, WeightUnit

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class LiftsResponse(BaseModel):
    bench: float
    squat: float
    deadlift: float
    ohp: float
    unit: WeightUnit
    total_lb: float


class ProfileResponse(BaseModel):
    """The caller's gamification profile."""
    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    lifts: LiftsResponse
    bodyweight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    standing: RankSummaryResponse
    unlocked_cosmetics: List[str] = Field(default_factory=list)
    active_cosmetics: Dict[str, str] = Field(default_factory=dict)


class LiftsUpdateRequest(BaseModel):
    """Lifts to replace; omitted lifts keep their value."""
    bench: Optional[float] = None
    squat: Optional[float] = None
    deadlift: Optional[float] = None
    ohp: Optional[float] = None
    unit: str = WeightUnit.LB.value


class PersonalRecordRequest(BaseModel):
    lift: str = Field(..., description="bench, squat, deadlift or ohp")
    value: float
    unit: str = WeightUnit.LB.value


class PersonalRecordApiResponse(BaseModel):
    lift: LiftName
    is_pr: bool
    previous_value: float
    new_value: float
    unit: WeightUnit
    rank_before: Rank
    rank_after: Rank
    ranked_up: bool
    xp_awarded: int


def _lifts_response(profile) -> LiftsResponse:
    return LiftsResponse(
        **profile.as_dict(),
        unit=profile.unit,
        total_lb=round(profile.total_lb(), 1),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user_id: str = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """The caller's lifts, rank, XP level and cosmetics."""
    try:
        row = profile_service.get_profile_row(user_id)
        summary = profile_service.get_rank_summary(user_id)
    except GamificationError as e:
        raise http_error(e)

    metrics = body_metrics_from_row(row)
    return ProfileResponse(
        id=row.get("id") or user_id,
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        lifts=_lifts_response(lift_profile_from_row(row)),
        bodyweight_kg=metrics.bodyweight_kg,
        height_cm=metrics.height_cm,
        standing=rank_summary_response(summary),
        unlocked_cosmetics=list(row.get("unlocked_cosmetics") or []),
        active_cosmetics=dict(row.get("active_cosmetics") or {}),
    )


@router.put("/me/lifts", response_model=LiftsResponse)
def update_my_lifts(
    request: LiftsUpdateRequest,
    user_id: str = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Replace the given Big 4 maxima. Values may go down."""
    lifts = request.model_dump(exclude={"unit"}, exclude_none=True)
    try:
        profile = profile_service.update_lifts(user_id, lifts, request.unit)
    except GamificationError as e:
        raise http_error(e)
    return _lifts_response(profile)


@router.post("/me/records", response_model=PersonalRecordApiResponse)
def record_personal_record(
    request: PersonalRecordRequest,
    user_id: str = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Report a lift. Only a value above the stored max is kept and rewarded."""
    try:
        result = profile_service.record_personal_record(
            user_id, request.lift, request.value, request.unit,
        )
    except GamificationError as e:
        raise http_error(e)

    return PersonalRecordApiResponse(
        lift=result.lift,
        is_pr=result.is_pr,
        previous_value=result.previous_value,
        new_value=result.new_value,
        unit=result.unit,
        rank_before=result.rank_before,
        rank_after=result.rank_after,
        ranked_up=result.ranked_up,
        xp_awarded=result.xp_awarded,
    )
