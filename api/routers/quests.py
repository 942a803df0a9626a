"""
Quests router: weekly rotation, progress and hidden quest reveals.

Endpoints:
- GET  /quests/weekly                 this week's five public quests
- GET  /quests/me                     weekly + hidden quests with the caller's progress
- POST /quests/{quest_id}/progress    add progress to a quest
- POST /quests/achievements           report an achievement (reveals hidden quests)
"""
from typing import List

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from api.deps import get_clock, get_current_user, get_quest_service
from api.errors import http_error
from application.exceptions import GamificationError
from application.ports import Clock
from backend.core.quest_service import (
    QuestService,
    UserQuest,
    get_active_weekly_quests,
    week_index,
)
from domain.models import Quest

router = APIRouter(
    prefix="/quests",
    tags=["Quests"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class QuestResponse(BaseModel):
    """A quest as shown to a client (hidden quests show the placeholder)."""
    id: str
    title: str
    description: str
    icon: str
    category: str
    target: float
    xp_reward: int
    hidden: bool = False


class UserQuestResponse(QuestResponse):
    progress: float = 0
    percent: float = 0
    completed: bool = False
    revealed: bool = False


class WeeklyQuestsResponse(BaseModel):
    week: int
    quests: List[QuestResponse]


class QuestBoardResponse(BaseModel):
    week: int
    weekly: List[UserQuestResponse]
    hidden: List[UserQuestResponse]


class QuestProgressRequest(BaseModel):
    amount: float = Field(default=1, description="Amount to add, must be > 0")


class QuestProgressResponse(BaseModel):
    quest_id: str
    progress: float
    target: float
    completed: bool
    xp_awarded: int


class AchievementRequest(BaseModel):
    trigger: str = Field(..., description="gym_war, duel or extreme")


class AchievementResponse(BaseModel):
    revealed: List[QuestResponse]


def _quest_response(quest: Quest) -> QuestResponse:
    return QuestResponse(
        id=quest.id,
        title=quest.title,
        description=quest.description,
        icon=quest.icon,
        category=quest.category.value,
        target=quest.target,
        xp_reward=quest.xp_reward,
        hidden=quest.hidden,
    )


def _user_quest_response(view: UserQuest) -> UserQuestResponse:
    return UserQuestResponse(
        id=view.quest.id,
        title=view.display.title,
        description=view.display.description,
        icon=view.display.icon,
        category=view.quest.category.value,
        target=view.quest.target,
        xp_reward=view.quest.xp_reward,
        hidden=view.quest.hidden,
        progress=view.progress,
        percent=round(view.percent, 1),
        completed=view.completed,
        revealed=view.revealed,
    )


def _revealed_response(quest: Quest) -> QuestResponse:
    response = _quest_response(quest)
    reveal = quest.display(revealed=True)
    return response.model_copy(
        update={"title": reveal.title, "icon": reveal.icon, "description": reveal.description},
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/weekly", response_model=WeeklyQuestsResponse)
def get_weekly_quests(clock: Clock = Depends(get_clock)):
    """The public quests active this week; identical for every client."""
    now = clock.now()
    return WeeklyQuestsResponse(
        week=week_index(now),
        quests=[_quest_response(q) for q in get_active_weekly_quests(now)],
    )


@router.get("/me", response_model=QuestBoardResponse)
def get_my_quests(
    user_id: str = Depends(get_current_user),
    quest_service: QuestService = Depends(get_quest_service),
    clock: Clock = Depends(get_clock),
):
    """Weekly and hidden quests with the caller's progress."""
    board = quest_service.get_user_quests(user_id, clock.now())
    return QuestBoardResponse(
        week=board.week,
        weekly=[_user_quest_response(v) for v in board.weekly],
        hidden=[_user_quest_response(v) for v in board.hidden],
    )


@router.post("/{quest_id}/progress", response_model=QuestProgressResponse)
def add_quest_progress(
    request: QuestProgressRequest,
    quest_id: str = Path(..., description="Quest ID"),
    user_id: str = Depends(get_current_user),
    quest_service: QuestService = Depends(get_quest_service),
):
    """Add progress; completing the quest grants its XP once."""
    try:
        result = quest_service.increment_progress(user_id, quest_id, request.amount)
    except GamificationError as e:
        raise http_error(e)

    return QuestProgressResponse(
        quest_id=result.quest_id,
        progress=result.progress,
        target=result.target,
        completed=result.completed,
        xp_awarded=result.xp_awarded,
    )


@router.post("/achievements", response_model=AchievementResponse)
def report_achievement(
    request: AchievementRequest,
    user_id: str = Depends(get_current_user),
    quest_service: QuestService = Depends(get_quest_service),
):
    """Reveal the hidden quests tied to an achievement trigger."""
    try:
        revealed = quest_service.handle_achievement(user_id, request.trigger)
    except GamificationError as e:
        raise http_error(e)
    return AchievementResponse(revealed=[_revealed_response(q) for q in revealed])
