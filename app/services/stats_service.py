"""
Stats aggregation.

Combines profile and record reads with the scoring engine to produce the
values the views display.  Everything is recomputed on each call: the
collections are small and there is no cache to invalidate.

1RM auto-update
---------------
:func:`plan_one_rep_max_updates` decides which stored 1RMs a session
raises.  For each exercise that is a competition lift, the best Epley
estimate over its qualifying sets (``weight > 0`` and ``1 <= reps <= 30``;
in strict mode only completed sets) is compared with the stored value and
proposed only when it is higher.  Applying the proposals can therefore
never lower a 1RM, and planning again against the same session after
applying them yields nothing.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from app.core.exceptions import DomainRangeError
from app.db.repositories.records import RecordRepository
from app.schemas.meal import DayMealRecord
from app.schemas.profile import Lift, UserProfile
from app.schemas.stats import DayNutritionSummary, OneRepMaxUpdate, SessionSummary, StatsResponse
from app.schemas.training_session import ExerciseRecord, TrainingSession
from app.schemas.weight import WeightEntry
from app.scoring.wilks import (REPS_MAX, REPS_MIN, compute_normalized_score, estimate_one_rep_max, progress_to_next,
                               round_half_away, )

logger = logging.getLogger(__name__)

# Exercise names recognised as competition lifts (matched case-insensitively)
LIFT_ALIASES: dict[str, Lift] = {
    "bench press": Lift.BENCH,
    "bench": Lift.BENCH,
    "ベンチプレス": Lift.BENCH,
    "squat": Lift.SQUAT,
    "back squat": Lift.SQUAT,
    "スクワット": Lift.SQUAT,
    "deadlift": Lift.DEADLIFT,
    "conventional deadlift": Lift.DEADLIFT,
    "デッドリフト": Lift.DEADLIFT,
}

DEFAULT_KCAL_TARGET = 2800


def match_lift(exercise_name: str) -> Optional[Lift]:
    """Competition lift an exercise name refers to, if any."""
    return LIFT_ALIASES.get(exercise_name.strip().lower())


def safe_normalized_score(bodyweight_kg: float, total_kg: float) -> Optional[float]:
    """Normalized score, or ``None`` when the inputs are out of domain."""
    try:
        return compute_normalized_score(bodyweight_kg, total_kg)
    except DomainRangeError as e:
        logger.debug("Score undefined: %s", e)
        return None


# ======================================================================
# 1RM auto-update
# ======================================================================


def best_one_rep_max(exercise: ExerciseRecord, strict: bool = True) -> Optional[float]:
    """Highest 1RM estimate over the qualifying sets of *exercise*."""
    best: Optional[float] = None
    for s in exercise.sets:
        if strict and not s.completed:
            continue
        if s.weight_kg <= 0 or not REPS_MIN <= s.reps <= REPS_MAX:
            continue
        estimate = estimate_one_rep_max(s.weight_kg, s.reps)
        if best is None or estimate > best:
            best = estimate
    return best


def plan_one_rep_max_updates(profile: UserProfile, session: TrainingSession,
                             strict: bool = True, ) -> list[OneRepMaxUpdate]:
    """1RM raises implied by *session* against *profile*.

    When a lift appears in several exercises the best estimate across
    all of them is used.  Values are rounded to the nearest kilogram.
    """
    best_by_lift: dict[Lift, float] = {}
    for exercise in session.exercises:
        lift = match_lift(exercise.name)
        if lift is None:
            continue
        best = best_one_rep_max(exercise, strict=strict)
        if best is not None and best > best_by_lift.get(lift, 0.0):
            best_by_lift[lift] = best

    updates = []
    for lift in Lift:
        best = best_by_lift.get(lift)
        if best is None:
            continue
        current = profile.one_rep_max(lift)
        if best > current:
            updated = round_half_away(best, 0)
            # Rounding down can land at or below the stored value
            if updated > current:
                updates.append(OneRepMaxUpdate(lift=lift, previous_kg=current, updated_kg=updated))
    return updates


def apply_one_rep_max_updates(profile: UserProfile, updates: list[OneRepMaxUpdate]) -> UserProfile:
    for update in updates:
        profile = profile.with_one_rep_max(update.lift, update.updated_kg)
    return profile


# ======================================================================
# Aggregator
# ======================================================================


class StatsAggregator:
    """Derived values over the record repository."""

    def __init__(self, repository: RecordRepository, kcal_target: int = DEFAULT_KCAL_TARGET):
        self.repository = repository
        self.kcal_target = kcal_target

    def compute_stats(self, profile: Optional[UserProfile] = None) -> StatsResponse:
        """Score, tier and progress for *profile* (default: the stored one).

        An undefined score is reported as ``score=None`` and placed in
        the lowest tier.
        """
        profile = profile or self.repository.get_profile()
        total = profile.total_kg
        score = safe_normalized_score(profile.bodyweight_kg, total)
        progress = progress_to_next(score if score is not None else 0.0)

        return StatsResponse(bodyweight_kg=profile.bodyweight_kg, total_kg=total, score=score,
                             current_rank=progress.current_rank, next_rank=progress.next_rank,
                             progress_percent=progress.progress_percent, points_to_next=progress.points_to_next, )

    def plan_one_rep_max_updates(self, session: TrainingSession, strict: bool = True) -> list[OneRepMaxUpdate]:
        return plan_one_rep_max_updates(self.repository.get_profile(), session, strict=strict)

    # ------------------------------------------------------------------
    # History views
    # ------------------------------------------------------------------

    def recent_sessions(self, limit: int = 7) -> list[SessionSummary]:
        return [self.summarize_session(s) for s in self.repository.list_sessions()[:limit]]

    @staticmethod
    def summarize_session(session: TrainingSession) -> SessionSummary:
        return SessionSummary(id=session.id, date=session.date, completed=session.completed,
                              volume_kg=session.volume_kg, completed_sets=session.completed_set_count,
                              total_sets=session.total_sets, exercise_names=[ex.name for ex in session.exercises], )

    def nutrition_for_day(self, day: datetime.date) -> DayNutritionSummary:
        record = self.repository.get_day_meals(day) or DayMealRecord(date=day)
        return self._summarize_day(record)

    def recent_nutrition(self, limit: int = 7) -> list[DayNutritionSummary]:
        return [self._summarize_day(r) for r in self.repository.list_meal_records()[:limit]]

    def _summarize_day(self, record: DayMealRecord) -> DayNutritionSummary:
        kcal = record.kcal
        return DayNutritionSummary(date=record.date, kcal=kcal, protein=round_half_away(record.protein, 1),
                                   fat=round_half_away(record.fat, 1), carbs=round_half_away(record.carbs, 1),
                                   meal_count=len(record.entries), kcal_target=self.kcal_target,
                                   kcal_remaining=max(0, self.kcal_target - kcal), )

    def weight_trend(self, limit: int = 14) -> list[WeightEntry]:
        """Most recent *limit* weight entries, oldest first."""
        recent = sorted(self.repository.list_weights(), key=lambda w: w.date, reverse=True)[:limit]
        return list(reversed(recent))

    # ------------------------------------------------------------------
    # Planning context
    # ------------------------------------------------------------------

    def planning_context(self) -> str:
        """System context handed to the planning assistant."""
        profile = self.repository.get_profile()
        stats = self.compute_stats(profile)
        score = f"{stats.score:.1f}" if stats.score is not None else "n/a"

        return (
            "You are an expert personal trainer. Work with the user to build a science-based "
            "training plan from scratch.\n\n"
            "[User data]\n"
            f"Bodyweight: {profile.bodyweight_kg:g} kg / Wilks score: {score} ({stats.current_rank.label})\n"
            f"Bench 1RM: {profile.bench_1rm:g} kg / Squat 1RM: {profile.squat_1rm:g} kg / "
            f"Deadlift 1RM: {profile.deadlift_1rm:g} kg\n"
            f"Training days per week: {profile.training_days}\n\n"
            "[How to proceed]\n"
            "1. Check today's condition (fatigue, available time, last session) with one or two questions.\n"
            "2. Propose concrete exercises, loads, reps and sets based on volume theory and RPE.\n"
            "3. Adjust flexibly to the user's feedback.\n"
            "4. Present the final plan as a structured bullet list.\n\n"
            "Answer logically, objectively and data-driven."
        )
