"""
Lift profile and body metrics value objects.

A LiftProfile holds the one-rep maxima of the Big 4 lifts (bench press,
squat, deadlift, overhead press). Rank thresholds are expressed in pounds,
so every profile knows how to report its total in pounds regardless of the
unit the user stores lifts in.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


# Conversion constants
LB_TO_KG = 0.453592
KG_TO_LB = 1 / LB_TO_KG


class WeightUnit(str, Enum):
    """Unit a weight value is expressed in."""

    LB = "lb"
    KG = "kg"


class LiftName(str, Enum):
    """The Big 4 lifts used for ranking."""

    BENCH = "bench"
    SQUAT = "squat"
    DEADLIFT = "deadlift"
    OHP = "ohp"


def to_kg(value: float, unit: WeightUnit) -> float:
    """Convert a weight to kilograms (unrounded)."""
    if WeightUnit(unit) == WeightUnit.KG:
        return float(value)
    return float(value) * LB_TO_KG


def to_lb(value: float, unit: WeightUnit) -> float:
    """Convert a weight to pounds (unrounded)."""
    if WeightUnit(unit) == WeightUnit.LB:
        return float(value)
    return float(value) * KG_TO_LB


class LiftProfile(BaseModel):
    """
    One-rep maxima for the Big 4 lifts.

    All lifts default to zero. Values are stored in ``unit``; use
    ``total_lb()`` when comparing against rank thresholds.

    Examples:
        >>> profile = LiftProfile(bench=185, squat=225, deadlift=275, ohp=95)
        >>> profile.total_lb()
        780.0
    """

    bench: float = Field(default=0, ge=0, description="Bench press 1RM")
    squat: float = Field(default=0, ge=0, description="Squat 1RM")
    deadlift: float = Field(default=0, ge=0, description="Deadlift 1RM")
    ohp: float = Field(default=0, ge=0, description="Overhead press 1RM")
    unit: WeightUnit = Field(default=WeightUnit.LB, description="Unit the lifts are stored in")

    model_config = {"frozen": True}

    @field_validator("bench", "squat", "deadlift", "ohp", mode="before")
    @classmethod
    def default_missing_lift(cls, v):
        """Treat null lifts coming from the database as zero."""
        return 0 if v is None else v

    def get(self, lift: LiftName) -> float:
        """Return the stored value for a single lift."""
        return getattr(self, LiftName(lift).value)

    def total(self) -> float:
        """Sum of the four lifts in the stored unit."""
        return self.bench + self.squat + self.deadlift + self.ohp

    def total_lb(self) -> float:
        """Sum of the four lifts in pounds."""
        return to_lb(self.total(), self.unit)

    def lift_lb(self, lift: LiftName) -> float:
        """A single lift converted to pounds."""
        return to_lb(self.get(lift), self.unit)

    def with_lift(self, lift: LiftName, value: float) -> "LiftProfile":
        """Return a copy with one lift replaced."""
        return self.model_copy(update={LiftName(lift).value: value})

    def as_dict(self) -> Dict[str, float]:
        """Lift values keyed by lift name (no unit)."""
        return {lift.value: self.get(lift) for lift in LiftName}


class BodyMetrics(BaseModel):
    """
    Bodyweight and height of a user.

    Bodyweight is optional; without it relative-strength scoring (and thus
    duel fairness) is unavailable for the user.
    """

    bodyweight_kg: Optional[float] = Field(default=None, ge=0, description="Bodyweight in kilograms")
    height_cm: Optional[float] = Field(default=None, ge=0, description="Height in centimeters")

    model_config = {"frozen": True}

    @property
    def has_bodyweight(self) -> bool:
        """True when a usable (non-zero) bodyweight is known."""
        return bool(self.bodyweight_kg) and self.bodyweight_kg > 0
