"""
User profile schema.

The profile is the only record the scoring engine reads directly: its
bodyweight and the three competition-lift 1RMs produce the normalized
score.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Lift(str, Enum):
    """The three competition lifts."""
    BENCH = "bench"
    SQUAT = "squat"
    DEADLIFT = "deadlift"


# Lift -> profile attribute holding its 1RM
LIFT_FIELDS: dict[Lift, str] = {
    Lift.BENCH: "bench_1rm",
    Lift.SQUAT: "squat_1rm",
    Lift.DEADLIFT: "deadlift_1rm",
}


class UserProfile(BaseModel):
    """Single local user's profile."""

    name: str = Field("Athlete", max_length=100)
    bodyweight_kg: float = Field(78.0, gt=0.0, le=1000.0, description="Current bodyweight (kg)")
    bench_1rm: float = Field(100.0, gt=0.0, le=1000.0, description="Bench press 1RM (kg)")
    squat_1rm: float = Field(130.0, gt=0.0, le=1000.0, description="Squat 1RM (kg)")
    deadlift_1rm: float = Field(160.0, gt=0.0, le=1000.0, description="Deadlift 1RM (kg)")
    training_days: int = Field(4, ge=1, le=7, description="Training days per week")

    @property
    def total_kg(self) -> float:
        """Sum of the three 1RMs."""
        return self.bench_1rm + self.squat_1rm + self.deadlift_1rm

    def one_rep_max(self, lift: Lift) -> float:
        return getattr(self, LIFT_FIELDS[lift])

    def with_one_rep_max(self, lift: Lift, value: float) -> "UserProfile":
        """Return a copy with the 1RM of *lift* replaced."""
        return self.model_copy(update={LIFT_FIELDS[lift]: value})
