"""
Training session service.

Starts a day's session from the weekly menu, saves edits and finishes
sessions.  Finishing a session has two side effects besides the upsert:

* the weekday's menu template is overwritten from the session, so the
  next session on that weekday starts from what was actually done;
* the 1RM auto-update raises stored 1RMs when the session beats them.
"""

import datetime
import logging
from typing import Optional

from pydantic import BaseModel

from app.db.repositories.records import RecordRepository
from app.schemas.common import utcnow
from app.schemas.menu import MenuTemplateItem
from app.schemas.stats import OneRepMaxUpdate
from app.schemas.training_session import ExerciseRecord, SetRecord, TrainingSession
from app.services.stats_service import apply_one_rep_max_updates, plan_one_rep_max_updates

logger = logging.getLogger(__name__)

# Template fallbacks for exercises that have no sets left
TEMPLATE_DEFAULT_REPS = 8
TEMPLATE_DEFAULT_WEIGHT_KG = 60.0


class CompletionResult(BaseModel):
    """Outcome of finishing a session."""

    session: TrainingSession
    one_rep_max_updates: list[OneRepMaxUpdate]


class TrainingService:
    """Service for training session business logic."""

    def __init__(self, repository: RecordRepository, strict_one_rep_max: bool = True):
        self.repository = repository
        self.strict_one_rep_max = strict_one_rep_max

    def start_session(self, day: datetime.date) -> TrainingSession:
        """The stored session for *day*, or a fresh one from the menu.

        A fresh session is not saved until the first :meth:`save_session`.
        """
        existing = self.repository.get_session_for_date(day)
        if existing:
            return existing

        template = self.repository.get_weekly_menu().template_for(day.weekday())
        exercises = [ExerciseRecord(name=item.exercise,
                                    sets=[SetRecord(weight_kg=item.weight_kg, reps=item.reps) for _ in
                                          range(item.sets)], ) for item in template]
        return TrainingSession(date=day, exercises=exercises)

    def save_session(self, session: TrainingSession) -> TrainingSession:
        return self.repository.save_session(session)

    def get_session(self, session_id: str) -> Optional[TrainingSession]:
        return self.repository.get_session(session_id)

    def complete_session(self, session: TrainingSession,
                         now: Optional[datetime.datetime] = None, ) -> CompletionResult:
        """Mark *session* complete, save it and apply its side effects."""
        finished = session.model_copy(update={"completed": True, "saved_at": now or utcnow()})
        self.repository.save_session(finished)
        self._save_template(finished)

        profile = self.repository.get_profile()
        updates = plan_one_rep_max_updates(profile, finished, strict=self.strict_one_rep_max)
        if updates:
            self.repository.save_profile(apply_one_rep_max_updates(profile, updates))
            for update in updates:
                logger.info("1RM for %s raised from %g to %g kg", update.lift.value, update.previous_kg,
                            update.updated_kg)

        return CompletionResult(session=finished, one_rep_max_updates=updates)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save_template(self, session: TrainingSession) -> None:
        items = []
        for ex in session.exercises:
            if not ex.name.strip():
                continue
            first = ex.sets[0] if ex.sets else None
            items.append(MenuTemplateItem(exercise=ex.name, sets=min(20, max(1, len(ex.sets))),
                                          reps=first.reps if first and first.reps >= 1 else TEMPLATE_DEFAULT_REPS,
                                          weight_kg=first.weight_kg if first else TEMPLATE_DEFAULT_WEIGHT_KG, ))
        menu = self.repository.get_weekly_menu()
        days = dict(menu.days)
        days[session.date.weekday()] = items
        self.repository.save_weekly_menu(menu.model_copy(update={"days": days}))
