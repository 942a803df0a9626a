"""
Gym Wars leaderboard entry.

Every workout a member logs counts for their home gym; gyms are compared
weekly.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GymWarEntry(BaseModel):
    """Weekly standing of one gym."""

    gym_id: str
    gym_name: str
    location: str = ""
    total_workouts: int = Field(default=0, ge=0)
    total_xp: int = Field(default=0, ge=0)
    member_count: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0, description="Consecutive active days")
    position: Optional[int] = Field(default=None, ge=1, description="1-based leaderboard position")
