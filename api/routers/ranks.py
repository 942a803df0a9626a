"""
Ranks router.

Endpoints:
- GET  /ranks/catalog   the rank ladder
- GET  /ranks/me        the caller's rank and XP level
- POST /ranks/evaluate  rank for an arbitrary set of lifts
"""
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from api.deps import get_current_user, get_profile_service
from api.errors import http_error
from application.exceptions import GamificationError
from backend.core.catalog import all_ranks
from backend.core.profile_service import ProfileService, RankSummary
from backend.core.rank_engine import get_next_rank, get_progress_percent, get_rank
from domain.models import LiftProfile, Rank, WeightUnit

router = APIRouter(
    prefix="/ranks",
    tags=["Ranks"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class LevelResponse(BaseModel):
    name: str
    min_xp: int
    icon: str
    color: str


class RankEvaluateRequest(BaseModel):
    """Big 4 maxima to evaluate."""
    bench: float = 0
    squat: float = 0
    deadlift: float = 0
    ohp: float = 0
    unit: WeightUnit = WeightUnit.LB


class RankEvaluateResponse(BaseModel):
    rank: Rank
    next_rank: Optional[Rank] = None
    progress_percent: float
    total_lb: float


class RankSummaryResponse(RankEvaluateResponse):
    """Rank plus XP level standing."""
    xp: int
    level: LevelResponse
    next_level: Optional[LevelResponse] = None
    level_progress_percent: float


def rank_summary_response(summary: RankSummary) -> RankSummaryResponse:
    return RankSummaryResponse(
        rank=summary.rank,
        next_rank=summary.next_rank,
        progress_percent=round(summary.progress_percent, 1),
        total_lb=summary.total_lb,
        xp=summary.xp,
        level=LevelResponse(**asdict(summary.level)),
        next_level=LevelResponse(**asdict(summary.next_level)) if summary.next_level else None,
        level_progress_percent=round(summary.level_progress_percent, 1),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/catalog", response_model=List[Rank])
def get_rank_catalog():
    """The rank ladder in ascending threshold order."""
    return all_ranks()


@router.get("/me", response_model=RankSummaryResponse)
def get_my_rank(
    user_id: str = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """The caller's rank, progress to the next rank and XP level."""
    try:
        return rank_summary_response(profile_service.get_rank_summary(user_id))
    except GamificationError as e:
        raise http_error(e)


@router.post("/evaluate", response_model=RankEvaluateResponse)
def evaluate_rank(request: RankEvaluateRequest):
    """
    Rank for the given lifts without touching any profile.

    Negative lifts are rejected with 400.
    """
    try:
        profile = LiftProfile(**request.model_dump())
    except ValidationError:
        raise HTTPException(status_code=400, detail="Lifts must be non-negative numbers")

    return RankEvaluateResponse(
        rank=get_rank(profile),
        next_rank=get_next_rank(profile),
        progress_percent=round(get_progress_percent(profile), 1),
        total_lb=round(profile.total_lb(), 1),
    )
