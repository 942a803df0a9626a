"""
Duels router.

Endpoints:
- GET  /duels/templates        ready-made duel setups
- GET  /duels                  the caller's duels (optionally filtered by status)
- POST /duels                  challenge another user
- GET  /duels/{id}             a single duel
- POST /duels/{id}/accept      opponent accepts (pending -> active)
- POST /duels/{id}/decline     opponent declines (pending -> declined)
- POST /duels/{id}/progress    submit progress and proof (active only)
- POST /duels/{id}/resolve     complete an active duel now

Time-driven transitions (expiry, end of the duel window) are applied when a
duel is read, so every response reflects the current state.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_duel_service
from api.errors import http_error
from application.exceptions import GamificationError
from backend.core.catalog import load_duel_templates
from backend.core.duel_service import DuelService
from domain.models import Duel, DuelTemplate

router = APIRouter(
    prefix="/duels",
    tags=["Duels"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateDuelRequest(BaseModel):
    """
    Duel challenge.

    Either reference a template or give type and exercise explicitly;
    explicit fields override the template's.
    """
    opponent_id: str = Field(..., min_length=1)
    type: Optional[str] = Field(default=None, description="reps, weight, workouts, duration or custom")
    exercise: Optional[str] = None
    target: Optional[str] = None
    template_id: Optional[str] = None
    lift: Optional[str] = Field(default=None, description="Big 4 lift compared for fairness")


class DuelProgressRequest(BaseModel):
    value: Optional[float] = Field(default=None, description="Best (weight duels) or increment")
    media_url: Optional[str] = None


class DuelListResponse(BaseModel):
    duels: List[Duel]
    total: int


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/templates", response_model=List[DuelTemplate])
def list_duel_templates():
    """The duel template catalog."""
    return list(load_duel_templates())


@router.get("", response_model=DuelListResponse)
def list_duels(
    status: Optional[List[str]] = Query(default=None, description="Filter by status"),
    limit: int = Query(default=50, ge=1, le=200),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    """The caller's duels, newest first."""
    try:
        duels = duel_service.list_for_user(user_id, statuses=status, limit=limit)
    except GamificationError as e:
        raise http_error(e)
    return DuelListResponse(duels=duels, total=len(duels))


@router.post("", response_model=Duel, status_code=201)
def create_duel(
    request: CreateDuelRequest,
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    """Challenge another user. The duel waits 48 hours for acceptance."""
    try:
        return duel_service.create(
            user_id,
            request.opponent_id,
            duel_type=request.type,
            exercise=request.exercise,
            target=request.target,
            template_id=request.template_id,
            lift=request.lift,
        )
    except GamificationError as e:
        raise http_error(e)


@router.get("/{duel_id}", response_model=Duel)
def get_duel(
    duel_id: str = Path(..., description="Duel ID"),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    try:
        return duel_service.get(duel_id, user_id)
    except GamificationError as e:
        raise http_error(e)


@router.post("/{duel_id}/accept", response_model=Duel)
def accept_duel(
    duel_id: str = Path(..., description="Duel ID"),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    try:
        return duel_service.accept(duel_id, user_id)
    except GamificationError as e:
        raise http_error(e)


@router.post("/{duel_id}/decline", response_model=Duel)
def decline_duel(
    duel_id: str = Path(..., description="Duel ID"),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    try:
        return duel_service.decline(duel_id, user_id)
    except GamificationError as e:
        raise http_error(e)


@router.post("/{duel_id}/progress", response_model=Duel)
def submit_duel_progress(
    request: DuelProgressRequest,
    duel_id: str = Path(..., description="Duel ID"),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    """Submit progress for the caller's side. A missing or negative value is rejected."""
    try:
        return duel_service.submit_progress(duel_id, user_id, request.value, request.media_url)
    except GamificationError as e:
        raise http_error(e)


@router.post("/{duel_id}/resolve", response_model=Duel)
def resolve_duel(
    duel_id: str = Path(..., description="Duel ID"),
    user_id: str = Depends(get_current_user),
    duel_service: DuelService = Depends(get_duel_service),
):
    """Complete an active duel; higher progress wins, equal progress is a draw."""
    try:
        return duel_service.resolve(duel_id, user_id)
    except GamificationError as e:
        raise http_error(e)
