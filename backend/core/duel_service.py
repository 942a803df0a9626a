"""
Duel Lifecycle Service.

Drives a duel through the transition table in domain.models.duel:

    pending --accept--> active --resolve / ends_at--> completed
       |  \\
       |   --decline--> declined
       --expires_at--> expired

Time-driven edges are not scheduled. They are applied lazily whenever a duel
is read or written, using the injected Clock, so a duel is never observed in
a state its deadlines have already moved it out of.

XP is granted at the transition into ``completed`` and only there. Every
status write is conditional on the status it was read in, so when two
requests race to complete the same duel only one write lands and each duel
pays out once.
"""
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from application.exceptions import InvalidInput, InvalidProof, InvalidTransition, NotFound
from application.ports import Clock, DuelRepository, ProfileRepository
from backend.core import catalog
from backend.core.levels import XP_REWARDS
from backend.core.profile_service import body_metrics_from_row, lift_profile_from_row
from backend.core.strength import FairnessLabel, StrengthSample, check_fairness
from domain.models import (
    ACCEPTANCE_WINDOW,
    COMPLETION_WINDOW,
    Duel,
    DuelProof,
    DuelResult,
    DuelSide,
    DuelStatus,
    DuelType,
    LiftName,
    can_transition,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Row Converters
# =============================================================================


def duel_to_row(duel: Duel) -> Dict[str, Any]:
    """Serialize a duel for the repository (ISO datetimes, enum values)."""
    return duel.model_dump(mode="json", exclude={"id"})


def duel_from_row(row: Dict[str, Any]) -> Duel:
    """Build a Duel from a repository row; unknown columns are ignored."""
    return Duel.model_validate(row)


def _parse_duel_type(value: Any) -> DuelType:
    try:
        return DuelType(value)
    except ValueError:
        valid = ", ".join(t.value for t in DuelType)
        raise InvalidInput(f"Invalid duel type '{value}'. Must be one of: {valid}")


def _parse_lift(value: Optional[str]) -> Optional[LiftName]:
    if value is None:
        return None
    try:
        return LiftName(value)
    except ValueError:
        return None


# =============================================================================
# Duel Service
# =============================================================================


class DuelService:
    """
    Service for the duel lifecycle.

    Every public method returns the duel as it stands after lazy time-driven
    transitions have been applied.
    """

    def __init__(
        self,
        duel_repo: DuelRepository,
        profile_repo: ProfileRepository,
        clock: Clock,
    ):
        """
        Initialize the duel service.

        Args:
            duel_repo: Repository for duel persistence
            profile_repo: Repository for names, lifts and XP grants
            clock: Source of the current time
        """
        self._duel_repo = duel_repo
        self._profile_repo = profile_repo
        self._clock = clock

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create(
        self,
        challenger_id: str,
        opponent_id: str,
        *,
        duel_type: Optional[str] = None,
        exercise: Optional[str] = None,
        target: Optional[str] = None,
        template_id: Optional[str] = None,
        lift: Optional[str] = None,
    ) -> Duel:
        """
        Create a pending duel.

        Fields not given explicitly are taken from the template when
        ``template_id`` is set. For weight duels on a Big 4 lift (from the
        template, ``lift``, or an exercise named after the lift) the advisory
        fairness label is computed from both profiles.

        Raises:
            InvalidInput: same challenger and opponent, invalid type or exercise
            NotFound: unknown template or opponent profile
        """
        if challenger_id == opponent_id:
            raise InvalidInput("You cannot challenge yourself")

        template = None
        if template_id is not None:
            template = catalog.get_duel_template(template_id)
            if template is None:
                raise NotFound(f"Duel template '{template_id}' not found")

        duel_type = _parse_duel_type(duel_type if duel_type is not None else (template.type if template else None))
        exercise = exercise if exercise is not None else (template.exercise if template else "")
        target = target if target is not None else (template.target if template else "")
        lift_name = _parse_lift(lift) or (template.lift if template else None) or _parse_lift(exercise)

        opponent = self._profile_repo.get_profile(opponent_id)
        if not opponent:
            raise NotFound(f"Opponent {opponent_id} not found")
        challenger = self._profile_repo.get_profile(challenger_id) or {}

        fairness = None
        if duel_type == DuelType.WEIGHT and lift_name is not None:
            fairness = self._fairness_label(challenger, opponent, lift_name)

        now = self._clock.now()
        try:
            duel = Duel(
                challenger_id=challenger_id,
                challenger_name=challenger.get("display_name") or "",
                challenger_avatar=challenger.get("avatar_url") or "",
                opponent_id=opponent_id,
                opponent_name=opponent.get("display_name") or "",
                opponent_avatar=opponent.get("avatar_url") or "",
                type=duel_type,
                exercise=exercise,
                target=target,
                created_at=now,
                expires_at=now + ACCEPTANCE_WINDOW,
                fairness=fairness,
            )
        except ValidationError as e:
            raise InvalidInput(f"Invalid duel: {e.errors()[0]['msg']}")

        stored = duel_from_row(self._duel_repo.create(duel_to_row(duel)))
        logger.info(
            "Duel %s created: %s vs %s (%s %s, %s)",
            stored.id, challenger_id, opponent_id, duel_type.value, exercise, fairness or "no fairness",
        )
        return stored

    def _fairness_label(
        self,
        challenger: Dict[str, Any],
        opponent: Dict[str, Any],
        lift: LiftName,
    ) -> str:
        samples = []
        for row in (challenger, opponent):
            if not row:
                return FairnessLabel.UNAVAILABLE.value
            profile = lift_profile_from_row(row)
            samples.append(
                StrengthSample(
                    lift=profile.get(lift),
                    bodyweight_kg=body_metrics_from_row(row).bodyweight_kg,
                    unit=profile.unit,
                )
            )
        return check_fairness(*samples).label.value

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, duel_id: str, user_id: str) -> Duel:
        """
        Get a duel the user takes part in.

        Raises:
            NotFound: unknown duel, or the user is not a participant
        """
        row = self._duel_repo.get(duel_id)
        if not row:
            raise NotFound(f"Duel {duel_id} not found")
        duel = duel_from_row(row)
        if duel.side_of(user_id) is None:
            raise NotFound(f"Duel {duel_id} not found")
        return self._refresh(duel)

    def list_for_user(
        self,
        user_id: str,
        statuses: Optional[List[str]] = None,
        limit: int = 50,
    ) -> List[Duel]:
        """
        Duels the user takes part in, newest first.

        Status filtering happens after the lazy transitions so a stale
        ``pending`` row past its deadline is reported as ``expired``.
        """
        wanted = None
        if statuses:
            try:
                wanted = {DuelStatus(s) for s in statuses}
            except ValueError:
                valid = ", ".join(s.value for s in DuelStatus)
                raise InvalidInput(f"Invalid duel status filter. Must be among: {valid}")

        duels = [self._refresh(duel_from_row(row)) for row in self._duel_repo.list_for_user(user_id, limit=limit)]
        if wanted is not None:
            duels = [d for d in duels if d.status in wanted]
        return duels

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def accept(self, duel_id: str, user_id: str) -> Duel:
        """
        Opponent accepts a pending duel: pending -> active.

        Raises:
            InvalidInput: the user is not the opponent
            InvalidTransition: the duel is not pending (including already expired)
        """
        duel = self.get(duel_id, user_id)
        if duel.side_of(user_id) != DuelSide.OPPONENT:
            raise InvalidInput("Only the challenged user can accept a duel")

        now = self._clock.now()
        return self._transition(
            duel,
            DuelStatus.ACTIVE,
            accepted_at=now,
            ends_at=now + COMPLETION_WINDOW,
        )

    def decline(self, duel_id: str, user_id: str) -> Duel:
        """
        Opponent declines a pending duel: pending -> declined.

        Raises:
            InvalidInput: the user is not the opponent
            InvalidTransition: the duel is not pending
        """
        duel = self.get(duel_id, user_id)
        if duel.side_of(user_id) != DuelSide.OPPONENT:
            raise InvalidInput("Only the challenged user can decline a duel")
        return self._transition(duel, DuelStatus.DECLINED, resolved_at=self._clock.now())

    def submit_progress(
        self,
        duel_id: str,
        user_id: str,
        value: Any,
        media_url: Optional[str] = None,
    ) -> Duel:
        """
        Record progress and proof for the user's side of an active duel.

        For weight duels ``value`` is the side's best and progress becomes
        ``max(progress, value)``. For every other type it is an increment.

        Raises:
            InvalidTransition: the duel is not active
            InvalidProof: value missing, non-finite or negative
        """
        duel = self.get(duel_id, user_id)
        if duel.status != DuelStatus.ACTIVE:
            logger.warning("Progress rejected for duel %s in status %s", duel.id, duel.status.value)
            raise InvalidTransition(f"Cannot submit progress to a {duel.status.value} duel")

        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
            raise InvalidProof("Proof value must be a finite non-negative number")

        side = duel.side_of(user_id)
        current = duel.progress_of(side)
        if duel.type == DuelType.WEIGHT:
            progress = max(current, float(value))
        else:
            progress = current + float(value)

        proof = DuelProof(value=float(value), media_url=media_url, submitted_at=self._clock.now())
        updated = self._save(duel.with_progress(side, progress, proof), expected_status=DuelStatus.ACTIVE)
        logger.info("Duel %s: %s progress %s -> %s", duel.id, side.value, current, progress)
        return updated

    def resolve(self, duel_id: str, user_id: str) -> Duel:
        """
        Complete an active duel now; higher progress wins, equal is a draw.

        Raises:
            InvalidTransition: the duel is not active
        """
        duel = self.get(duel_id, user_id)
        return self._complete(duel, self._clock.now())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _refresh(self, duel: Duel) -> Duel:
        """
        Apply the time-driven transitions that are due.

        When another request has already moved the duel on, its stored state
        is returned as is.
        """
        now = self._clock.now()
        try:
            if duel.status == DuelStatus.PENDING and now >= duel.expires_at:
                logger.info("Duel %s expired unaccepted", duel.id)
                return self._transition(duel, DuelStatus.EXPIRED, resolved_at=duel.expires_at)
            if duel.status == DuelStatus.ACTIVE and duel.ends_at is not None and now >= duel.ends_at:
                return self._complete(duel, duel.ends_at)
        except InvalidTransition:
            row = self._duel_repo.get(duel.id)
            if not row:
                raise NotFound(f"Duel {duel.id} not found")
            return duel_from_row(row)
        return duel

    def _transition(self, duel: Duel, target: DuelStatus, **changes) -> Duel:
        if not can_transition(duel.status, target):
            logger.warning(
                "Rejected duel %s transition %s -> %s", duel.id, duel.status.value, target.value,
            )
            raise InvalidTransition(f"Cannot move a {duel.status.value} duel to {target.value}")
        updated = self._save(duel.with_status(target, **changes), expected_status=duel.status)
        logger.info("Duel %s: %s -> %s", duel.id, duel.status.value, target.value)
        return updated

    def _complete(self, duel: Duel, resolved_at: datetime) -> Duel:
        result = duel.decide()
        winner_id = None
        if result == DuelResult.CHALLENGER_WON:
            winner_id = duel.challenger_id
        elif result == DuelResult.OPPONENT_WON:
            winner_id = duel.opponent_id

        completed = self._transition(
            duel,
            DuelStatus.COMPLETED,
            result=result,
            winner_id=winner_id,
            resolved_at=resolved_at,
        )
        self._grant_xp(completed)
        return completed

    def _grant_xp(self, duel: Duel) -> None:
        consolation = XP_REWARDS["LOSE_DUEL"]
        if duel.result == DuelResult.DRAW:
            self._profile_repo.add_xp(duel.challenger_id, consolation)
            self._profile_repo.add_xp(duel.opponent_id, consolation)
            logger.info("Duel %s drawn, +%d XP each", duel.id, consolation)
            return

        loser_id = duel.opponent_id if duel.winner_id == duel.challenger_id else duel.challenger_id
        self._profile_repo.add_xp(duel.winner_id, duel.xp_reward)
        self._profile_repo.add_xp(loser_id, consolation)
        logger.info("Duel %s won by %s (+%d XP)", duel.id, duel.winner_id, duel.xp_reward)

    def _save(self, duel: Duel, expected_status: DuelStatus) -> Duel:
        """Write the duel only if its stored status is still ``expected_status``."""
        row = self._duel_repo.update(duel.id, duel_to_row(duel), expected_status=expected_status.value)
        if row is not None:
            return duel_from_row(row)
        if self._duel_repo.get(duel.id) is None:
            raise NotFound(f"Duel {duel.id} not found")
        logger.warning("Duel %s changed concurrently, no longer %s", duel.id, expected_status.value)
        raise InvalidTransition(f"Duel {duel.id} is no longer {expected_status.value}")
