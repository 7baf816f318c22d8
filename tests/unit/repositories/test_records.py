"""
Unit tests for the record repository on an in-memory store.
"""

import datetime
import json

from app.db.repositories.records import (
    PROFILE_KEY,
    SESSIONS_KEY,
    WEIGHTS_KEY,
    RecordRepository,
)
from app.schemas.chat import ChatMessage, ChatRole, TokenUsage
from app.schemas.goals import GoalData, GoalEntry
from app.schemas.meal import MealEntry
from app.schemas.menu import MenuTemplateItem, WeeklyMenu
from app.schemas.profile import UserProfile
from app.schemas.training_session import ExerciseRecord, SetRecord, TrainingSession
from app.schemas.weight import WeightEntry
from app.store.base import PersistentKeyValueStore
from app.store.memory import InMemoryBackend


# ======================================================================
# Helpers
# ======================================================================


def _make_repository(initial: dict[str, str] | None = None) -> tuple[RecordRepository, InMemoryBackend]:
    backend = InMemoryBackend(initial)
    repository = RecordRepository(PersistentKeyValueStore(backend, prefix="b3_"))
    repository.hydrate()
    return repository, backend


def _make_session(session_id: str, day: datetime.date) -> TrainingSession:
    return TrainingSession(id=session_id, date=day,
                           exercises=[ExerciseRecord(name="Squat", sets=[SetRecord(weight_kg=100, reps=5)])], )


# ======================================================================
# Hydration and defaults
# ======================================================================


class TestDefaults:
    """Fresh repositories expose the registered defaults."""

    def test_defaults(self):
        repository, _ = _make_repository()
        assert repository.is_hydrated
        assert repository.get_profile() == UserProfile()
        assert repository.list_sessions() == []
        assert repository.list_meal_records() == []
        assert repository.list_weights() == []
        assert repository.get_weekly_menu() == WeeklyMenu()
        assert repository.get_goals() == GoalData()
        assert repository.list_chat_messages() == []
        assert repository.get_chat_token_totals().input_tokens == 0

    def test_not_hydrated_until_hydrate(self):
        backend = InMemoryBackend({"b3_profile": json.dumps({"name": "Daichi", "bodyweight_kg": 82})})
        repository = RecordRepository(PersistentKeyValueStore(backend, prefix="b3_"))
        assert repository.is_hydrated is False
        assert repository.get_profile().name == "Athlete"

        repository.hydrate()
        assert repository.is_hydrated is True
        assert repository.get_profile().name == "Daichi"
        assert repository.get_profile().bodyweight_kg == 82

    def test_wrongly_shaped_values_keep_defaults(self):
        day = datetime.date(2026, 3, 2)
        repository, _ = _make_repository({
            f"b3_{PROFILE_KEY}": "null",
            f"b3_{SESSIONS_KEY}": json.dumps([{"id": 1}]),
            f"b3_{WEIGHTS_KEY}": json.dumps([{"date": day.isoformat(), "kg": 81.5}]),
        })
        assert repository.is_hydrated is True
        assert repository.get_profile() == UserProfile()
        assert repository.list_sessions() == []
        assert [w.kg for w in repository.list_weights()] == [81.5]

    def test_writes_after_rejected_value_succeed(self):
        repository, backend = _make_repository({f"b3_{SESSIONS_KEY}": json.dumps({"not": "a list"})})
        repository.save_session(_make_session("s1", datetime.date(2026, 3, 2)))
        assert [s.id for s in repository.list_sessions()] == ["s1"]
        assert json.loads(backend.data[f"b3_{SESSIONS_KEY}"])[0]["id"] == "s1"


# ======================================================================
# Collections
# ======================================================================


class TestSessions:
    def test_save_and_fetch(self):
        repository, backend = _make_repository()
        day = datetime.date(2026, 3, 2)
        session = repository.save_session(_make_session("s1", day))
        assert repository.get_session("s1") == session
        assert repository.get_session_for_date(day) == session
        assert json.loads(backend.data[f"b3_{SESSIONS_KEY}"])[0]["id"] == "s1"

    def test_upsert_does_not_duplicate(self):
        repository, _ = _make_repository()
        repository.save_session(_make_session("s1", datetime.date(2026, 3, 1)))
        repository.save_session(_make_session("s2", datetime.date(2026, 3, 2)))
        repository.save_session(_make_session("s1", datetime.date(2026, 3, 1)).model_copy(update={"completed": True}))
        sessions = repository.list_sessions()
        assert [s.id for s in sessions] == ["s2", "s1"]
        assert sessions[1].completed is True

    def test_unknown_session(self):
        repository, _ = _make_repository()
        assert repository.get_session("nope") is None
        assert repository.get_session_for_date(datetime.date(2026, 1, 1)) is None


class TestMeals:
    def test_add_update_remove(self):
        repository, _ = _make_repository()
        day = datetime.date(2026, 3, 2)
        entry = repository.add_meal_entry(day, MealEntry(time="07:30", name="Oatmeal", kcal=300, protein=10))
        assert repository.get_day_meals(day).kcal == 300

        repository.update_meal_entry(day, entry.model_copy(update={"kcal": 350}))
        assert repository.get_day_meals(day).kcal == 350

        repository.remove_meal_entry(day, entry.id)
        assert repository.get_day_meals(day).entries == []


class TestWeights:
    def test_replace_by_date_updates_profile(self):
        repository, backend = _make_repository()
        day = datetime.date(2026, 3, 2)
        repository.add_weight(WeightEntry(date=day, kg=80.2))
        repository.add_weight(WeightEntry(date=day, kg=79.6))

        assert repository.list_weights() == [WeightEntry(date=day, kg=79.6)]
        assert repository.get_weight_for_date(day).kg == 79.6
        assert repository.get_profile().bodyweight_kg == 79.6
        assert json.loads(backend.data[f"b3_{PROFILE_KEY}"])["bodyweight_kg"] == 79.6
        assert len(json.loads(backend.data[f"b3_{WEIGHTS_KEY}"])) == 1


class TestWholeValueCollections:
    def test_profile_overwrite(self):
        repository, _ = _make_repository()
        repository.save_profile(UserProfile(name="Daichi", bench_1rm=120))
        assert repository.get_profile().name == "Daichi"
        assert repository.get_profile().bench_1rm == 120

    def test_weekly_menu_round_trips_through_json_keys(self):
        repository, backend = _make_repository()
        item = MenuTemplateItem(exercise="Deadlift", sets=3, reps=3, weight_kg=180)
        repository.save_weekly_menu(WeeklyMenu(days={2: [item]}))
        assert "2" in json.loads(backend.data["b3_weeklyMenu"])["days"]

        reloaded, _ = _make_repository(dict(backend.data))
        assert reloaded.get_weekly_menu().template_for(2) == [item]

    def test_goals_overwrite(self):
        repository, _ = _make_repository()
        repository.save_goals(GoalData(short_term=GoalEntry(text="Bench 110 kg")))
        assert repository.get_goals().short_term.text == "Bench 110 kg"
        assert repository.get_goals().long_term is None


class TestChat:
    def test_history_and_token_totals(self):
        repository, _ = _make_repository()
        repository.append_chat_message(ChatMessage(role=ChatRole.USER, content="hi"))
        repository.append_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content="hello"))
        assert [m.role for m in repository.list_chat_messages()] == [ChatRole.USER, ChatRole.ASSISTANT]

        repository.add_chat_token_usage(TokenUsage(input_tokens=10, output_tokens=5))
        totals = repository.add_chat_token_usage(TokenUsage(input_tokens=3, output_tokens=2))
        assert (totals.input_tokens, totals.output_tokens) == (13, 7)

        repository.clear_chat_history()
        assert repository.list_chat_messages() == []
        assert repository.get_chat_token_totals().input_tokens == 13
