"""
Meal log schemas.

Meals are grouped per calendar day.  A :class:`DayMealRecord` is created
lazily the first time an entry is logged for its date.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import new_id


class MealEntry(BaseModel):
    """A single logged meal or snack."""

    id: str = Field(default_factory=new_id)
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="Time of day (HH:MM)")
    name: str = Field(..., min_length=1, max_length=200)
    kcal: int = Field(0, ge=0, description="Energy (kcal)")
    protein: float = Field(0.0, ge=0.0, description="Protein (g)")
    fat: float = Field(0.0, ge=0.0, description="Fat (g)")
    carbs: float = Field(0.0, ge=0.0, description="Carbohydrates (g)")
    amount: Optional[float] = Field(None, gt=0.0, description="Portion size")
    unit: Optional[str] = Field(None, max_length=20, description="Portion unit, e.g. 'g' or 'bowl'")


class DayMealRecord(BaseModel):
    """All meals of one calendar day, in logging order."""

    date: datetime.date
    entries: list[MealEntry] = Field(default_factory=list)

    @property
    def kcal(self) -> int:
        return sum(e.kcal for e in self.entries)

    @property
    def protein(self) -> float:
        return sum(e.protein for e in self.entries)

    @property
    def fat(self) -> float:
        return sum(e.fat for e in self.entries)

    @property
    def carbs(self) -> float:
        return sum(e.carbs for e in self.entries)
