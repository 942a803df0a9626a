"""
Duel aggregate and its status transition table.

A duel is a timed head-to-head challenge between two users. The status is
an enumerated state; DUEL_TRANSITIONS lists the only edges the lifecycle
service may take. Time-driven edges (expiry, completion at the end of the
window) are applied lazily by the service whenever a duel is read or
written.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, Field

from domain.models.lift_profile import LiftName


ACCEPTANCE_WINDOW = timedelta(hours=48)
COMPLETION_WINDOW = timedelta(days=7)
DEFAULT_DUEL_XP_REWARD = 150


class DuelType(str, Enum):
    """What the duel measures."""

    REPS = "reps"
    WEIGHT = "weight"
    WORKOUTS = "workouts"
    DURATION = "duration"
    CUSTOM = "custom"


class DuelStatus(str, Enum):
    """
    Lifecycle states.

    - PENDING: created, awaiting the opponent
    - ACTIVE: accepted, progress is tracked
    - COMPLETED: terminal, resolved by progress
    - EXPIRED: terminal, never accepted in time
    - DECLINED: terminal, refused by the opponent
    """

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"
    DECLINED = "declined"


class DuelResult(str, Enum):
    """Outcome of a completed duel."""

    CHALLENGER_WON = "challenger_won"
    OPPONENT_WON = "opponent_won"
    DRAW = "draw"


class DuelSide(str, Enum):
    """Which participant an action refers to."""

    CHALLENGER = "challenger"
    OPPONENT = "opponent"


DUEL_TRANSITIONS: Dict[DuelStatus, FrozenSet[DuelStatus]] = {
    DuelStatus.PENDING: frozenset({DuelStatus.ACTIVE, DuelStatus.EXPIRED, DuelStatus.DECLINED}),
    DuelStatus.ACTIVE: frozenset({DuelStatus.COMPLETED}),
    DuelStatus.COMPLETED: frozenset(),
    DuelStatus.EXPIRED: frozenset(),
    DuelStatus.DECLINED: frozenset(),
}


def can_transition(current: DuelStatus, target: DuelStatus) -> bool:
    """True when the transition table allows current -> target."""
    return DuelStatus(target) in DUEL_TRANSITIONS[DuelStatus(current)]


class DuelProof(BaseModel):
    """Proof attached to a progress submission."""

    value: float = Field(..., ge=0)
    media_url: Optional[str] = None
    submitted_at: datetime

    model_config = {"frozen": True}


class Duel(BaseModel):
    """
    A challenge between a challenger and an opponent.

    Display names and avatars are cached for the UI and are not
    authoritative identity. Domain methods return new instances.
    """

    id: Optional[str] = Field(default=None, description="None until persisted")

    challenger_id: str = Field(..., min_length=1)
    challenger_name: str = ""
    challenger_avatar: str = ""
    opponent_id: str = Field(..., min_length=1)
    opponent_name: str = ""
    opponent_avatar: str = ""

    type: DuelType
    exercise: str = Field(..., min_length=1, max_length=120)
    target: str = Field(default="", max_length=200)

    status: DuelStatus = DuelStatus.PENDING
    challenger_progress: float = Field(default=0, ge=0)
    opponent_progress: float = Field(default=0, ge=0)
    challenger_proof: Optional[DuelProof] = None
    opponent_proof: Optional[DuelProof] = None

    created_at: datetime
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    result: Optional[DuelResult] = None
    winner_id: Optional[str] = None
    xp_reward: int = Field(default=DEFAULT_DUEL_XP_REWARD, ge=0)
    fairness: Optional[str] = Field(default=None, description="Advisory fairness label")

    @property
    def is_terminal(self) -> bool:
        return not DUEL_TRANSITIONS[self.status]

    def side_of(self, user_id: str) -> Optional[DuelSide]:
        """Which side the user is on, or None for non-participants."""
        if user_id == self.challenger_id:
            return DuelSide.CHALLENGER
        if user_id == self.opponent_id:
            return DuelSide.OPPONENT
        return None

    def progress_of(self, side: DuelSide) -> float:
        if DuelSide(side) == DuelSide.CHALLENGER:
            return self.challenger_progress
        return self.opponent_progress

    def with_status(self, status: DuelStatus, **changes) -> "Duel":
        """Return a copy in a new status (no transition checks here)."""
        return self.model_copy(update={"status": DuelStatus(status), **changes})

    def with_progress(self, side: DuelSide, progress: float, proof: Optional[DuelProof]) -> "Duel":
        """Return a copy with one side's progress and proof replaced."""
        prefix = DuelSide(side).value
        update = {f"{prefix}_progress": progress}
        if proof is not None:
            update[f"{prefix}_proof"] = proof
        return self.model_copy(update=update)

    def decide(self) -> DuelResult:
        """Result from the current progress; equal progress is a draw."""
        if self.challenger_progress > self.opponent_progress:
            return DuelResult.CHALLENGER_WON
        if self.opponent_progress > self.challenger_progress:
            return DuelResult.OPPONENT_WON
        return DuelResult.DRAW

    def __str__(self) -> str:
        return f"Duel({self.id or 'new'}, {self.type.value}, {self.status.value})"


class DuelTemplate(BaseModel):
    """A ready-made duel setup from the template catalog."""

    id: str
    type: DuelType
    exercise: str
    target: str = ""
    description: str = ""
    lift: Optional[LiftName] = Field(
        default=None,
        description="Big 4 lift compared for fairness (weight duels only)",
    )

    model_config = {"frozen": True}
