"""
Training session schemas.

A :class:`TrainingSession` owns its exercises and their sets outright.
Sessions are keyed by ``id``; in practice there is one session per
calendar day.  The set-edit helpers mutate the session in place, the
same way the form views edit a day's log before saving it.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import new_id

# Values used when a set is added to an exercise that has none yet
DEFAULT_SET_WEIGHT_KG = 60.0
DEFAULT_SET_REPS = 5
NEW_EXERCISE_NAME = "New exercise"


class SetRecord(BaseModel):
    """A single set: load, repetitions and whether it was performed."""

    weight_kg: float = Field(0.0, ge=0.0, le=1000.0, description="Load in kilograms")
    reps: int = Field(0, ge=0, le=100, description="Repetitions")
    completed: bool = False

    @property
    def volume_kg(self) -> float:
        return self.weight_kg * self.reps


class ExerciseRecord(BaseModel):
    """One exercise in a session.  Names are free text."""

    name: str = Field(..., max_length=100)
    sets: list[SetRecord] = Field(default_factory=list)

    @property
    def completed_sets(self) -> list[SetRecord]:
        return [s for s in self.sets if s.completed]


class TrainingSession(BaseModel):
    """A day's training log."""

    id: str = Field(default_factory=new_id, description="Stable identity across edits")
    date: datetime.date
    exercises: list[ExerciseRecord] = Field(default_factory=list)
    completed: bool = False
    saved_at: Optional[datetime.datetime] = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def completed_set_count(self) -> int:
        return sum(len(ex.completed_sets) for ex in self.exercises)

    @property
    def volume_kg(self) -> float:
        """Sum of weight x reps over completed sets."""
        return sum(s.volume_kg for ex in self.exercises for s in ex.completed_sets)

    # ------------------------------------------------------------------
    # Set edits
    # ------------------------------------------------------------------

    def toggle_set(self, exercise_index: int, set_index: int) -> None:
        """Flip the completed flag of one set.  No-op on a finished session."""
        if self.completed:
            return
        target = self.exercises[exercise_index].sets[set_index]
        target.completed = not target.completed

    def add_set(self, exercise_index: int) -> SetRecord:
        """Append a set copying the load and reps of the previous one."""
        exercise = self.exercises[exercise_index]
        last = exercise.sets[-1] if exercise.sets else None
        new_set = SetRecord(weight_kg=last.weight_kg if last else DEFAULT_SET_WEIGHT_KG,
                            reps=last.reps if last else DEFAULT_SET_REPS, completed=False, )
        exercise.sets.append(new_set)
        return new_set

    def remove_set(self, exercise_index: int, set_index: int) -> None:
        del self.exercises[exercise_index].sets[set_index]

    def add_exercise(self, name: str = NEW_EXERCISE_NAME) -> ExerciseRecord:
        exercise = ExerciseRecord(name=name, sets=[SetRecord(weight_kg=DEFAULT_SET_WEIGHT_KG, reps=8)])
        self.exercises.append(exercise)
        return exercise

    def rename_exercise(self, exercise_index: int, name: str) -> None:
        self.exercises[exercise_index].name = name

    def remove_exercise(self, exercise_index: int) -> None:
        del self.exercises[exercise_index]
