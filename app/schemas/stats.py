"""
Derived-value schemas produced by the scoring engine and the stats
aggregator.  Nothing here is persisted; every value is recomputed on read.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.profile import Lift
from app.scoring.rank_table import RankInfo


class StatsResponse(BaseModel):
    """Headline numbers for the current profile."""

    bodyweight_kg: float
    total_kg: float = Field(..., description="Sum of the three competition-lift 1RMs")
    score: Optional[float] = Field(None, description="Normalized score (None when the inputs are out of domain)")
    current_rank: RankInfo
    next_rank: Optional[RankInfo]
    progress_percent: float
    points_to_next: float


class OneRepMaxUpdate(BaseModel):
    """A single raise of a stored 1RM triggered by a completed session."""

    lift: Lift
    previous_kg: float
    updated_kg: float


class SessionSummary(BaseModel):
    """Per-session digest used by the history views."""

    id: str
    date: datetime.date
    completed: bool
    volume_kg: float = Field(..., description="Sum of weight x reps over completed sets")
    completed_sets: int
    total_sets: int
    exercise_names: list[str]


class DayNutritionSummary(BaseModel):
    """Nutrition totals for one calendar day."""

    date: datetime.date
    kcal: int
    protein: float
    fat: float
    carbs: float
    meal_count: int
    kcal_target: int
    kcal_remaining: int
