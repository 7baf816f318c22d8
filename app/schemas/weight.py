"""Bodyweight log schema."""

import datetime

from pydantic import BaseModel, Field


class WeightEntry(BaseModel):
    """One bodyweight measurement.  At most one entry exists per date."""

    date: datetime.date = Field(..., description="Calendar day of the measurement (YYYY-MM-DD)")
    kg: float = Field(..., gt=0.0, le=1000.0, description="Bodyweight (kg)")
