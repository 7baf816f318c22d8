"""
Record repository.

Typed access to the single local user's collections on top of a
:class:`~app.store.base.PersistentKeyValueStore`.  Each collection lives
under its own key and is changed through its own merge policy (see
:mod:`app.db.repositories.merge`).

Write results from the store are deliberately ignored here: persistence
is fail-open and the in-memory collection is authoritative for the
running process.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter

from app.db.repositories import merge
from app.schemas.chat import ChatMessage, ChatTokenTotals, TokenUsage
from app.schemas.goals import GoalData
from app.schemas.meal import DayMealRecord, MealEntry
from app.schemas.menu import WeeklyMenu
from app.schemas.profile import UserProfile
from app.schemas.training_session import TrainingSession
from app.schemas.weight import WeightEntry
from app.store.base import PersistentKeyValueStore

T = TypeVar("T")

# Collection keys
PROFILE_KEY = "profile"
SESSIONS_KEY = "sessions"
MEALS_KEY = "meals"
WEIGHTS_KEY = "weights"
WEEKLY_MENU_KEY = "weeklyMenu"
GOALS_KEY = "goals"
CHAT_HISTORY_KEY = "chatHistory"
CHAT_TOKENS_KEY = "chatTokenTotals"

_SESSIONS = TypeAdapter(list[TrainingSession])
_MEALS = TypeAdapter(list[DayMealRecord])
_WEIGHTS = TypeAdapter(list[WeightEntry])
_CHAT = TypeAdapter(list[ChatMessage])


def _dump(value: Any) -> Any:
    """JSON-compatible form of a model or list of models."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


class RecordRepository:
    """Repository for the local user's records."""

    def __init__(self, store: PersistentKeyValueStore):
        self.store = store
        # Persisted values that do not parse as their collection are ignored on hydration
        store.register(PROFILE_KEY, _dump(UserProfile()), UserProfile.model_validate)
        store.register(SESSIONS_KEY, [], _SESSIONS.validate_python)
        store.register(MEALS_KEY, [], _MEALS.validate_python)
        store.register(WEIGHTS_KEY, [], _WEIGHTS.validate_python)
        store.register(WEEKLY_MENU_KEY, _dump(WeeklyMenu()), WeeklyMenu.model_validate)
        store.register(GOALS_KEY, _dump(GoalData()), GoalData.model_validate)
        store.register(CHAT_HISTORY_KEY, [], _CHAT.validate_python)
        store.register(CHAT_TOKENS_KEY, _dump(ChatTokenTotals()), ChatTokenTotals.model_validate)

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------

    def hydrate(self) -> None:
        self.store.hydrate()

    @property
    def is_hydrated(self) -> bool:
        return self.store.fully_hydrated

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self) -> UserProfile:
        return UserProfile.model_validate(self.store.get(PROFILE_KEY))

    def save_profile(self, profile: UserProfile) -> UserProfile:
        self.store.set(PROFILE_KEY, _dump(profile))
        return profile

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def list_sessions(self) -> list[TrainingSession]:
        """All sessions, most recent first."""
        return _SESSIONS.validate_python(self.store.get(SESSIONS_KEY))

    def get_session(self, session_id: str) -> Optional[TrainingSession]:
        return next((s for s in self.list_sessions() if s.id == session_id), None)

    def get_session_for_date(self, day: datetime.date) -> Optional[TrainingSession]:
        return next((s for s in self.list_sessions() if s.date == day), None)

    def save_session(self, session: TrainingSession) -> TrainingSession:
        """Upsert by id."""
        self._apply(SESSIONS_KEY, _SESSIONS, lambda sessions: merge.upsert_session(sessions, session))
        return session

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    def list_meal_records(self) -> list[DayMealRecord]:
        """Day records, most recent date first."""
        return _MEALS.validate_python(self.store.get(MEALS_KEY))

    def get_day_meals(self, day: datetime.date) -> Optional[DayMealRecord]:
        return next((r for r in self.list_meal_records() if r.date == day), None)

    def add_meal_entry(self, day: datetime.date, entry: MealEntry) -> MealEntry:
        self._apply(MEALS_KEY, _MEALS, lambda records: merge.add_meal_entry(records, day, entry))
        return entry

    def update_meal_entry(self, day: datetime.date, entry: MealEntry) -> MealEntry:
        self._apply(MEALS_KEY, _MEALS, lambda records: merge.update_meal_entry(records, day, entry))
        return entry

    def remove_meal_entry(self, day: datetime.date, entry_id: str) -> None:
        self._apply(MEALS_KEY, _MEALS, lambda records: merge.remove_meal_entry(records, day, entry_id))

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def list_weights(self) -> list[WeightEntry]:
        """Weight log, most recently added first."""
        return _WEIGHTS.validate_python(self.store.get(WEIGHTS_KEY))

    def get_weight_for_date(self, day: datetime.date) -> Optional[WeightEntry]:
        return next((w for w in self.list_weights() if w.date == day), None)

    def add_weight(self, entry: WeightEntry) -> WeightEntry:
        """Replace-by-date insert.  Also sets the profile bodyweight."""
        self._apply(WEIGHTS_KEY, _WEIGHTS, lambda weights: merge.replace_weight_by_date(weights, entry))
        self.store.update(PROFILE_KEY, lambda raw: _dump(
            UserProfile.model_validate(raw).model_copy(update={"bodyweight_kg": entry.kg})))
        return entry

    # ------------------------------------------------------------------
    # Weekly menu / goals
    # ------------------------------------------------------------------

    def get_weekly_menu(self) -> WeeklyMenu:
        return WeeklyMenu.model_validate(self.store.get(WEEKLY_MENU_KEY))

    def save_weekly_menu(self, menu: WeeklyMenu) -> WeeklyMenu:
        self.store.set(WEEKLY_MENU_KEY, _dump(menu))
        return menu

    def get_goals(self) -> GoalData:
        return GoalData.model_validate(self.store.get(GOALS_KEY))

    def save_goals(self, goals: GoalData) -> GoalData:
        self.store.set(GOALS_KEY, _dump(goals))
        return goals

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def list_chat_messages(self) -> list[ChatMessage]:
        """Chat history, oldest first."""
        return _CHAT.validate_python(self.store.get(CHAT_HISTORY_KEY))

    def append_chat_message(self, message: ChatMessage) -> ChatMessage:
        self._apply(CHAT_HISTORY_KEY, _CHAT, lambda messages: messages + [message])
        return message

    def clear_chat_history(self) -> None:
        self.store.set(CHAT_HISTORY_KEY, [])

    def get_chat_token_totals(self) -> ChatTokenTotals:
        return ChatTokenTotals.model_validate(self.store.get(CHAT_TOKENS_KEY))

    def add_chat_token_usage(self, usage: TokenUsage) -> ChatTokenTotals:
        self.store.update(CHAT_TOKENS_KEY,
                          lambda raw: _dump(ChatTokenTotals.model_validate(raw).add(usage)))
        return self.get_chat_token_totals()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(self, key: str, adapter: TypeAdapter, policy: Callable[[list[T]], list[T]]) -> None:
        """Parse, merge, dump: one read-modify-write through the store."""
        self.store.update(key, lambda raw: _dump(policy(adapter.validate_python(raw))))
