"""
Profile Service for lifts, ranks and personal records.

Reads the gamification fields of a profile through the ProfileRepository
and turns them into domain values (LiftProfile, BodyMetrics) for the rank
engine. Lift edits are explicit replacements; reported personal records
only ever raise a lift.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from application.exceptions import InvalidInput, NotFound
from application.ports import ProfileRepository
from backend.core.levels import XP_REWARDS, Level, get_level, get_level_progress, get_next_level
from backend.core.rank_engine import get_next_rank, get_progress_percent, get_rank
from domain.models import BodyMetrics, LiftName, LiftProfile, Rank, WeightUnit
from domain.models.lift_profile import to_kg, to_lb

logger = logging.getLogger(__name__)


# =============================================================================
# Converters
# =============================================================================


def lift_profile_from_row(row: Dict[str, Any]) -> LiftProfile:
    """Build a LiftProfile from a profile row."""
    return LiftProfile(
        bench=row.get("bench"),
        squat=row.get("squat"),
        deadlift=row.get("deadlift"),
        ohp=row.get("ohp"),
        unit=row.get("lift_unit") or WeightUnit.LB,
    )


def body_metrics_from_row(row: Dict[str, Any]) -> BodyMetrics:
    """Build BodyMetrics from a profile row."""
    return BodyMetrics(
        bodyweight_kg=row.get("bodyweight_kg"),
        height_cm=row.get("height_cm"),
    )


def _convert(value: float, source: WeightUnit, target: WeightUnit) -> float:
    if WeightUnit(source) == WeightUnit(target):
        return float(value)
    if WeightUnit(target) == WeightUnit.KG:
        return round(to_kg(value, source), 1)
    return round(to_lb(value, source), 1)


def _check_lift_value(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"Lift '{name}' must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidInput(f"Lift '{name}' must be a non-negative number")
    return float(value)


def _parse_lift(lift: str) -> LiftName:
    try:
        return LiftName(lift)
    except ValueError:
        valid = ", ".join(l.value for l in LiftName)
        raise InvalidInput(f"Unknown lift '{lift}'. Must be one of: {valid}")


def _parse_unit(unit: str) -> WeightUnit:
    try:
        return WeightUnit(unit)
    except ValueError:
        raise InvalidInput(f"Unknown weight unit '{unit}'. Must be 'lb' or 'kg'")


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class RankSummary:
    """Rank and level standing of a user."""
    rank: Rank
    next_rank: Optional[Rank]
    progress_percent: float
    total_lb: float
    xp: int
    level: Level
    next_level: Optional[Level]
    level_progress_percent: float


@dataclass
class PersonalRecordResult:
    """Outcome of reporting a new personal record."""
    lift: LiftName
    is_pr: bool
    previous_value: float
    new_value: float
    unit: WeightUnit
    rank_before: Rank
    rank_after: Rank
    xp_awarded: int = 0

    @property
    def ranked_up(self) -> bool:
        return self.rank_after.min_total_lb > self.rank_before.min_total_lb


# =============================================================================
# Profile Service
# =============================================================================


class ProfileService:
    """
    Service for lift profile edits, rank summaries and personal records.
    """

    def __init__(self, profile_repo: ProfileRepository):
        """
        Initialize the profile service.

        Args:
            profile_repo: Repository for profile data access
        """
        self._profile_repo = profile_repo

    def get_profile_row(self, user_id: str) -> Dict[str, Any]:
        """Fetch a profile row or raise NotFound."""
        row = self._profile_repo.get_profile(user_id)
        if not row:
            raise NotFound(f"Profile {user_id} not found")
        return row

    def get_lift_profile(self, user_id: str) -> LiftProfile:
        return lift_profile_from_row(self.get_profile_row(user_id))

    def get_rank_summary(self, user_id: str) -> RankSummary:
        """Rank, next rank and progress, plus the XP level standing."""
        row = self.get_profile_row(user_id)
        profile = lift_profile_from_row(row)
        xp = int(row.get("xp") or 0)
        return RankSummary(
            rank=get_rank(profile),
            next_rank=get_next_rank(profile),
            progress_percent=get_progress_percent(profile),
            total_lb=round(profile.total_lb(), 1),
            xp=xp,
            level=get_level(xp),
            next_level=get_next_level(xp),
            level_progress_percent=get_level_progress(xp),
        )

    def update_lifts(
        self,
        user_id: str,
        lifts: Dict[str, Any],
        unit: str = WeightUnit.LB.value,
    ) -> LiftProfile:
        """
        Explicit edit of the Big 4 maxima.

        Lifts not present in ``lifts`` keep their stored value (converted if
        the unit changes). Values may go down: this is a user edit, not an
        automatic update.

        Raises:
            InvalidInput: unknown lift, unknown unit or negative value
            NotFound: profile does not exist
        """
        target_unit = _parse_unit(unit)
        parsed = {_parse_lift(name): _check_lift_value(name, value) for name, value in lifts.items()}

        current = self.get_lift_profile(user_id)
        merged = {
            lift.value: parsed.get(lift, _convert(current.get(lift), current.unit, target_unit))
            for lift in LiftName
        }

        row = self._profile_repo.update_lifts(user_id, merged, target_unit.value)
        if row is None:
            raise NotFound(f"Profile {user_id} not found")

        logger.info("Updated lifts for user %s: %s (%s)", user_id, merged, target_unit.value)
        return lift_profile_from_row(row)

    def record_personal_record(
        self,
        user_id: str,
        lift: str,
        value: Any,
        unit: str = WeightUnit.LB.value,
    ) -> PersonalRecordResult:
        """
        Report a lift from a workout; store it only if it beats the current max.

        A new PR is stored in the profile's own unit, triggers rank
        recomputation and grants the personal-record XP.

        Raises:
            InvalidInput: unknown lift, unknown unit or negative value
            NotFound: profile does not exist
        """
        lift_name = _parse_lift(lift)
        reported_unit = _parse_unit(unit)
        reported = _check_lift_value(lift_name.value, value)

        current = self.get_lift_profile(user_id)
        previous = current.get(lift_name)
        candidate = _convert(reported, reported_unit, current.unit)
        rank_before = get_rank(current)

        if candidate <= previous:
            return PersonalRecordResult(
                lift=lift_name,
                is_pr=False,
                previous_value=previous,
                new_value=previous,
                unit=current.unit,
                rank_before=rank_before,
                rank_after=rank_before,
            )

        updated = current.with_lift(lift_name, candidate)
        self._profile_repo.update_lifts(user_id, updated.as_dict(), current.unit.value)
        xp_awarded = XP_REWARDS["PERSONAL_RECORD"]
        self._profile_repo.add_xp(user_id, xp_awarded)

        rank_after = get_rank(updated)
        if rank_after != rank_before:
            logger.info("User %s ranked up: %s -> %s", user_id, rank_before.name, rank_after.name)
        logger.info(
            "New %s PR for user %s: %s -> %s %s",
            lift_name.value, user_id, previous, candidate, current.unit.value,
        )

        return PersonalRecordResult(
            lift=lift_name,
            is_pr=True,
            previous_value=previous,
            new_value=candidate,
            unit=current.unit,
            rank_before=rank_before,
            rank_after=rank_after,
            xp_awarded=xp_awarded,
        )
