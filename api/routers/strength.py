"""
Strength router: relative-strength scores and duel fairness.

Both endpoints are pure calculations and need no profile.
"""
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from api.errors import http_error
from application.exceptions import GamificationError
from backend.core.strength import (
    StrengthSample,
    check_fairness,
    get_duel_score,
    get_relative_strength,
)
from domain.models import WeightUnit

router = APIRouter(
    prefix="/strength",
    tags=["Strength"],
)


class StrengthScoreRequest(BaseModel):
    lift: float
    bodyweight_kg: float
    unit: WeightUnit = WeightUnit.LB


class StrengthScoreResponse(BaseModel):
    relative_strength: float
    duel_score: int


class StrengthSampleRequest(BaseModel):
    lift: float
    bodyweight_kg: Optional[float] = None
    unit: WeightUnit = WeightUnit.LB

    def to_sample(self) -> StrengthSample:
        return StrengthSample(lift=self.lift, bodyweight_kg=self.bodyweight_kg, unit=self.unit)


class FairnessRequest(BaseModel):
    challenger: StrengthSampleRequest
    opponent: StrengthSampleRequest


class FairnessResponse(BaseModel):
    label: str
    available: bool
    spread: Optional[float] = None
    challenger_score: Optional[int] = None
    opponent_score: Optional[int] = None


@router.post("/score", response_model=StrengthScoreResponse)
def score(request: StrengthScoreRequest):
    """Relative strength (lift kg / bodyweight kg) and duel score."""
    try:
        return StrengthScoreResponse(
            relative_strength=get_relative_strength(request.lift, request.bodyweight_kg, request.unit),
            duel_score=get_duel_score(request.lift, request.bodyweight_kg, request.unit),
        )
    except GamificationError as e:
        raise http_error(e)


@router.post("/fairness", response_model=FairnessResponse)
def fairness(request: FairnessRequest):
    """
    Advisory matchup label for two lifters.

    A missing bodyweight yields "fairness unavailable", not an error. A
    negative one is a 400.
    """
    try:
        report = check_fairness(request.challenger.to_sample(), request.opponent.to_sample())
    except GamificationError as e:
        raise http_error(e)

    return FairnessResponse(
        label=report.label.value,
        available=report.available,
        spread=report.spread,
        challenger_score=report.challenger_score,
        opponent_score=report.opponent_score,
    )
