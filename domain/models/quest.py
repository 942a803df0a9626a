"""
Quest catalog entries.

Quests come in two disjoint pools: public quests are always discoverable
and take part in the weekly rotation; hidden quests show a placeholder until
an external achievement reveals them for a user.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class QuestCategory(str, Enum):
    """Category tag of a quest."""

    BODYPART = "bodypart"
    CARDIO = "cardio"
    SOCIAL = "social"
    PR = "pr"
    ENDURANCE = "endurance"
    VARIETY = "variety"
    HIDDEN = "hidden"


class QuestTrigger(str, Enum):
    """Achievement families that reveal hidden quests."""

    GYM_WAR = "gym_war"
    DUEL = "duel"
    EXTREME = "extreme"


class QuestReveal(BaseModel):
    """What a hidden quest shows once revealed."""

    title: str
    icon: str = ""
    description: str = ""

    model_config = {"frozen": True}


# Shown in place of a hidden quest the user has not revealed yet
HIDDEN_PLACEHOLDER = QuestReveal(
    title="???",
    icon="❔",
    description="A hidden quest. Keep training to reveal it.",
)


class Quest(BaseModel):
    """
    Immutable quest catalog entry.

    Completion is ``progress >= target``; the XP reward is granted once.
    """

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    category: QuestCategory
    icon: str = ""
    target: float = Field(..., gt=0)
    xp_reward: int = Field(..., ge=0)
    hidden: bool = False
    trigger: Optional[QuestTrigger] = None
    reveal: Optional[QuestReveal] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_hidden_fields(self) -> "Quest":
        """Hidden quests need a trigger and a reveal record, public ones neither."""
        if self.hidden and (self.trigger is None or self.reveal is None):
            raise ValueError(f"Hidden quest '{self.id}' needs a trigger and a reveal record")
        if not self.hidden and (self.trigger is not None or self.reveal is not None):
            raise ValueError(f"Public quest '{self.id}' cannot carry a trigger or reveal record")
        return self

    def is_complete(self, progress: float) -> bool:
        """True when the accumulated progress reaches the target."""
        return progress >= self.target

    def display(self, revealed: bool) -> QuestReveal:
        """Title, icon and description as the user should see them."""
        if not self.hidden:
            return QuestReveal(title=self.title, icon=self.icon, description=self.description)
        if revealed:
            return self.reveal
        return HIDDEN_PLACEHOLDER
