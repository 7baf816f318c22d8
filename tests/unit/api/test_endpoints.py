"""
HTTP-level tests using FastAPI's TestClient.

The application is built with an in-memory store and a fake LLM client,
so nothing touches the database or the network.
"""

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.store.base import PersistentKeyValueStore
from app.store.memory import InMemoryBackend

MONDAY = "2026-03-02"


# ======================================================================
# Helpers
# ======================================================================


class _FakeStream:
    def __init__(self, chunks):
        self.chunks = chunks

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            yield chunk


class _FakeCompletions:
    def __init__(self):
        self.fail = False

    async def create(self, **kwargs):
        if self.fail:
            raise ConnectionError("offline")
        if kwargs.get("stream"):
            return _FakeStream([
                SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="Rest day."))], usage=None,
                                model_extra={}),
                SimpleNamespace(choices=[], usage=SimpleNamespace(prompt_tokens=9, completion_tokens=3),
                                model_extra={}),
            ])
        content = '{"kcal": 130, "protein": 11.4, "fat": 8.25, "carbs": 6.1}'
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def completions():
    return _FakeCompletions()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def client(backend, completions):
    llm_client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    app = create_app(store=PersistentKeyValueStore(backend, prefix="b3_"), llm_client=llm_client)
    with TestClient(app) as test_client:
        yield test_client


def _ndjson(response) -> list[dict]:
    return [json.loads(line) for line in response.text.splitlines() if line.strip()]


# ======================================================================
# Service info
# ======================================================================


class TestServiceInfo:
    def test_root_and_health(self, client):
        assert client.get("/").json()["status"] == "healthy"
        health = client.get("/health").json()
        assert health["hydrated"] is True


# ======================================================================
# Profile / stats
# ======================================================================


class TestProfileAndStats:
    def test_stats_follow_profile(self, client):
        profile = client.get("/api/v1/profile").json()
        profile.update(bodyweight_kg=80, bench_1rm=100, squat_1rm=100, deadlift_1rm=100)
        assert client.put("/api/v1/profile", json=profile).status_code == 200

        stats = client.get("/api/v1/stats").json()
        assert stats["total_kg"] == 300
        assert 190 < stats["score"] < 210
        assert stats["current_rank"]["tier"] == "silver2"
        assert stats["next_rank"]["tier"] == "silver3"

    def test_invalid_profile_rejected(self, client):
        profile = client.get("/api/v1/profile").json()
        profile["training_days"] = 9
        assert client.put("/api/v1/profile", json=profile).status_code == 422

    def test_profile_persisted_under_prefix(self, client, backend):
        profile = client.get("/api/v1/profile").json()
        profile["name"] = "Daichi"
        client.put("/api/v1/profile", json=profile)
        assert json.loads(backend.data["b3_profile"])["name"] == "Daichi"


# ======================================================================
# Training
# ======================================================================


class TestTraining:
    def test_session_lifecycle(self, client):
        session = client.get(f"/api/v1/training/sessions/{MONDAY}").json()
        assert session["completed"] is False
        assert session["exercises"][0]["name"] == "Bench press"

        session["exercises"] = [{"name": "Bench press", "sets": [{"weight_kg": 110, "reps": 5, "completed": True}]}]
        saved = client.put("/api/v1/training/sessions", json=session)
        assert saved.status_code == 200
        assert [s["id"] for s in client.get("/api/v1/training/sessions").json()] == [session["id"]]

        result = client.post(f"/api/v1/training/sessions/{session['id']}/complete").json()
        assert result["session"]["completed"] is True
        assert result["one_rep_max_updates"] == [{"lift": "bench", "previous_kg": 100.0, "updated_kg": 128.0}]
        assert client.get("/api/v1/profile").json()["bench_1rm"] == 128.0

        summaries = client.get("/api/v1/stats/sessions").json()
        assert summaries[0]["volume_kg"] == 550

    def test_complete_unknown_session(self, client):
        assert client.post("/api/v1/training/sessions/missing/complete").status_code == 404


# ======================================================================
# Meals / weights / plans
# ======================================================================


class TestMeals:
    def test_add_edit_delete(self, client):
        created = client.post(f"/api/v1/meals/{MONDAY}", json={"time": "08:00", "name": "Eggs", "kcal": 200})
        assert created.status_code == 201
        entry = created.json()

        entry["kcal"] = 250
        assert client.put(f"/api/v1/meals/{MONDAY}/{entry['id']}", json=entry).json()["kcal"] == 250
        assert client.get(f"/api/v1/meals/{MONDAY}").json()["entries"][0]["kcal"] == 250

        nutrition = client.get("/api/v1/stats/nutrition", params={"day": MONDAY}).json()
        assert nutrition[0]["kcal"] == 250

        assert client.delete(f"/api/v1/meals/{MONDAY}/{entry['id']}").status_code == 204
        assert client.get(f"/api/v1/meals/{MONDAY}").json()["entries"] == []

    def test_unknown_entry(self, client):
        entry = {"time": "08:00", "name": "Eggs", "kcal": 200}
        assert client.put(f"/api/v1/meals/{MONDAY}/nope", json=entry).status_code == 404
        assert client.delete(f"/api/v1/meals/{MONDAY}/nope").status_code == 404

    def test_invalid_time(self, client):
        response = client.post(f"/api/v1/meals/{MONDAY}", json={"time": "25:00", "name": "Eggs"})
        assert response.status_code == 422


class TestWeights:
    def test_replace_by_date_updates_profile(self, client):
        client.post("/api/v1/weights", json={"date": MONDAY, "kg": 80.4})
        client.post("/api/v1/weights", json={"date": MONDAY, "kg": 79.9})
        assert client.get("/api/v1/weights").json() == [{"date": MONDAY, "kg": 79.9}]
        assert client.get("/api/v1/profile").json()["bodyweight_kg"] == 79.9
        assert client.get("/api/v1/stats/weights").json() == [{"date": MONDAY, "kg": 79.9}]


class TestPlans:
    def test_menu_and_goals(self, client):
        menu = {"days": {"0": [{"exercise": "Deadlift", "sets": 3, "reps": 3, "weight_kg": 170}]}}
        assert client.put("/api/v1/plans/menu", json=menu).status_code == 200
        assert client.get("/api/v1/plans/menu").json()["days"]["0"][0]["exercise"] == "Deadlift"
        assert client.get(f"/api/v1/training/sessions/{MONDAY}").json()["exercises"][0]["name"] == "Deadlift"

        goals = {"short_term": {"text": "Bench 110 kg"}}
        assert client.put("/api/v1/plans/goals", json=goals).status_code == 200
        saved = client.get("/api/v1/plans/goals").json()
        assert saved["short_term"]["text"] == "Bench 110 kg"
        assert saved["mid_term"] is None

    def test_invalid_weekday(self, client):
        menu = {"days": {"7": []}}
        assert client.put("/api/v1/plans/menu", json=menu).status_code == 422


# ======================================================================
# Assistant
# ======================================================================


class TestAssistant:
    def test_nutrition_estimate(self, client):
        response = client.post("/api/v1/assistant/nutrition", json={"food_name": "natto"})
        assert response.status_code == 200
        assert response.json() == {"kcal": 130, "protein": 11.4, "fat": 8.3, "carbs": 6.1}

    def test_nutrition_empty_name(self, client):
        assert client.post("/api/v1/assistant/nutrition", json={"food_name": "  "}).status_code == 400

    def test_nutrition_remote_failure(self, client, completions):
        completions.fail = True
        response = client.post("/api/v1/assistant/nutrition", json={"food_name": "natto"})
        assert response.status_code == 502

    def test_chat_stream(self, client):
        response = client.post("/api/v1/assistant/chat", json={"content": "Plan today"})
        assert response.status_code == 200
        frames = _ndjson(response)
        assert frames == [
            {"type": "text", "text": "Rest day."},
            {"type": "usage", "usage": {"input_tokens": 9, "output_tokens": 3}},
        ]
        history = client.get("/api/v1/assistant/chat/history").json()
        assert [m["content"] for m in history] == ["Plan today", "Rest day."]
        assert client.get("/api/v1/assistant/chat/tokens").json() == {"input_tokens": 9, "output_tokens": 3}

        assert client.delete("/api/v1/assistant/chat/history").status_code == 204
        assert client.get("/api/v1/assistant/chat/history").json() == []

    def test_chat_failure_streams_error_frame(self, client, completions):
        completions.fail = True
        frames = _ndjson(client.post("/api/v1/assistant/chat", json={"content": "Plan today"}))
        assert [f["type"] for f in frames] == ["error"]

    def test_chat_empty_content(self, client):
        assert client.post("/api/v1/assistant/chat", json={"content": " "}).status_code == 400
