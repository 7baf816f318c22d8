"""
Weekly menu schemas.

The weekly menu maps a weekday index (0 = Monday ... 6 = Sunday, as
:meth:`datetime.date.weekday`) to the exercise template used to
pre-fill a new session on that day.
"""

from pydantic import BaseModel, Field, field_validator


class MenuTemplateItem(BaseModel):
    """One exercise line of a template."""

    exercise: str = Field(..., min_length=1, max_length=100)
    sets: int = Field(..., ge=1, le=20)
    reps: int = Field(..., ge=1, le=100)
    weight_kg: float = Field(..., ge=0.0, le=1000.0)


DEFAULT_TEMPLATE: tuple[MenuTemplateItem, ...] = (
    MenuTemplateItem(exercise="Bench press", sets=4, reps=5, weight_kg=85),
    MenuTemplateItem(exercise="Squat", sets=3, reps=8, weight_kg=110),
    MenuTemplateItem(exercise="Incline dumbbell press", sets=3, reps=10, weight_kg=32),
)


class WeeklyMenu(BaseModel):
    """Weekday index -> template."""

    days: dict[int, list[MenuTemplateItem]] = Field(default_factory=dict)

    @field_validator("days")
    @classmethod
    def validate_weekdays(cls, value: dict[int, list[MenuTemplateItem]]) -> dict[int, list[MenuTemplateItem]]:
        for weekday in value:
            if not 0 <= weekday <= 6:
                raise ValueError(f"Weekday index must be 0-6, got {weekday}")
        return value

    def template_for(self, weekday: int) -> list[MenuTemplateItem]:
        """Saved template for *weekday*, or the built-in default."""
        saved = self.days.get(weekday)
        if saved:
            return list(saved)
        return list(DEFAULT_TEMPLATE)
