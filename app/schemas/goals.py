"""Training goal schemas: one optional free-text goal per horizon."""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import utcnow


class GoalHorizon(str, Enum):
    SHORT_TERM = "short_term"
    MID_TERM = "mid_term"
    LONG_TERM = "long_term"


class GoalEntry(BaseModel):
    text: str = Field(..., max_length=1000)
    saved_at: datetime.datetime = Field(default_factory=utcnow)


class GoalData(BaseModel):
    """Goals across the three horizons.  Saved as a whole."""

    short_term: Optional[GoalEntry] = None
    mid_term: Optional[GoalEntry] = None
    long_term: Optional[GoalEntry] = None

    def get(self, horizon: GoalHorizon) -> Optional[GoalEntry]:
        return getattr(self, horizon.value)
