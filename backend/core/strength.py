"""
Relative-Strength Scorer and Duel Fairness Evaluator.

Absolute lifts are normalized by bodyweight so lifters of different sizes
can be compared. Scores feed the duel fairness check, which is advisory
only: it labels a matchup but never blocks a duel.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from application.exceptions import InvalidInput
from domain.models import WeightUnit
from domain.models.lift_profile import to_kg

logger = logging.getLogger(__name__)


# Spread thresholds (relative difference over the mean score)
FAIR_SPREAD = 0.15
SLIGHT_ADVANTAGE_SPREAD = 0.30


class FairnessLabel(str, Enum):
    """Classification of a duel matchup."""

    FAIR = "fair matchup"
    SLIGHT_ADVANTAGE = "slight advantage"
    UNFAIR = "unfair matchup"
    UNAVAILABLE = "fairness unavailable"


@dataclass(frozen=True)
class StrengthSample:
    """One side of a fairness check. bodyweight_kg may be unknown."""
    lift: float
    bodyweight_kg: Optional[float]
    unit: WeightUnit = WeightUnit.LB


@dataclass(frozen=True)
class FairnessReport:
    """Result of check_fairness."""
    label: FairnessLabel
    spread: Optional[float] = None
    challenger_score: Optional[int] = None
    opponent_score: Optional[int] = None

    @property
    def available(self) -> bool:
        return self.label != FairnessLabel.UNAVAILABLE


def _validate(lift: float, bodyweight_kg: float) -> None:
    if lift is None or not math.isfinite(lift) or lift < 0:
        raise InvalidInput(f"Lift must be a non-negative number, got {lift!r}")
    if bodyweight_kg is None or not math.isfinite(bodyweight_kg) or bodyweight_kg <= 0:
        raise InvalidInput(f"Bodyweight must be positive, got {bodyweight_kg!r}")


def get_relative_strength(
    lift: float,
    bodyweight_kg: float,
    unit: WeightUnit = WeightUnit.LB,
) -> float:
    """
    Lift in kilograms divided by bodyweight, rounded to two decimals.

    Example: 200 lb at 90.7 kg -> 200 * 0.453592 / 90.7 = 1.00

    Args:
        lift: Absolute lift in ``unit``
        bodyweight_kg: Bodyweight in kilograms, must be > 0
        unit: Unit of ``lift``

    Raises:
        InvalidInput: negative lift or non-positive bodyweight
    """
    _validate(lift, bodyweight_kg)
    return round(to_kg(lift, unit) / bodyweight_kg, 2)


def get_duel_score(
    lift: float,
    bodyweight_kg: float,
    unit: WeightUnit = WeightUnit.LB,
) -> int:
    """Relative strength x 100 as an integer 'points' value."""
    return int(round(get_relative_strength(lift, bodyweight_kg, unit) * 100))


def classify_spread(spread: float) -> FairnessLabel:
    if spread < FAIR_SPREAD:
        return FairnessLabel.FAIR
    if spread < SLIGHT_ADVANTAGE_SPREAD:
        return FairnessLabel.SLIGHT_ADVANTAGE
    return FairnessLabel.UNFAIR


def _has_bodyweight(sample: StrengthSample) -> bool:
    """
    True when the sample carries a usable bodyweight.

    Missing or zero means unknown. Negative or non-finite values are
    rejected.
    """
    if sample.bodyweight_kg is None or sample.bodyweight_kg == 0:
        return False
    if not math.isfinite(sample.bodyweight_kg) or sample.bodyweight_kg < 0:
        raise InvalidInput(f"Bodyweight must be positive, got {sample.bodyweight_kg!r}")
    return True


def check_fairness(challenger: StrengthSample, opponent: StrengthSample) -> FairnessReport:
    """
    Compare two lifters' duel scores and classify the matchup.

    spread = |a - b| / mean(a, b)
      - spread < 0.15         -> fair matchup
      - 0.15 <= spread < 0.30 -> slight advantage
      - spread >= 0.30        -> unfair matchup

    A zero mean (neither side lifts anything) counts as fair. Missing or
    zero bodyweight on either side yields FairnessLabel.UNAVAILABLE rather
    than an error. The result does not depend on argument order.

    Raises:
        InvalidInput: negative or non-finite bodyweight, or invalid lift
    """
    known = [_has_bodyweight(challenger), _has_bodyweight(opponent)]
    if not all(known):
        return FairnessReport(label=FairnessLabel.UNAVAILABLE)

    a = get_duel_score(challenger.lift, challenger.bodyweight_kg, challenger.unit)
    b = get_duel_score(opponent.lift, opponent.bodyweight_kg, opponent.unit)

    mean = (a + b) / 2
    spread = abs(a - b) / mean if mean else 0.0
    label = classify_spread(spread)

    logger.debug("Fairness check: %d vs %d, spread=%.3f -> %s", a, b, spread, label.value)
    return FairnessReport(
        label=label,
        spread=round(spread, 2),
        challenger_score=a,
        opponent_score=b,
    )
