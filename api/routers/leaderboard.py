"""
Leaderboard router: weekly Gym Wars standings.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.deps import get_clock, get_gym_war_repo
from application.ports import Clock, GymWarRepository
from backend.core.leaderboard import entries_from_rows, rank_gyms
from backend.core.quest_service import week_index
from domain.models import GymWarEntry

router = APIRouter(
    prefix="/leaderboard",
    tags=["Leaderboard"],
)


class GymLeaderboardResponse(BaseModel):
    week: int
    gyms: List[GymWarEntry]


@router.get("/gyms", response_model=GymLeaderboardResponse)
def get_gym_leaderboard(
    week: Optional[int] = Query(default=None, ge=0, description="Rotation week, defaults to the current one"),
    gym_war_repo: GymWarRepository = Depends(get_gym_war_repo),
    clock: Clock = Depends(get_clock),
):
    """Gyms ordered by weekly workouts, then XP, then name."""
    if week is None:
        week = week_index(clock.now())
    rows = gym_war_repo.get_weekly_stats(week)
    return GymLeaderboardResponse(week=week, gyms=rank_gyms(entries_from_rows(rows)))
