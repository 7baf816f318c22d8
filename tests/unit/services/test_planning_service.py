"""
Unit tests for the planning assistant with a fake streaming client.
"""

import asyncio
from types import SimpleNamespace

import pytest

from app.core.exceptions import CollaboratorFault, InvalidRequestError
from app.db.repositories.records import RecordRepository
from app.schemas.chat import ChatMessage, ChatRole, ErrorFrame, TextFrame, TokenUsage, UsageFrame
from app.services.planning_service import FALLBACK_MESSAGE, PlanningAssistant, _extract_usage
from app.services.stats_service import StatsAggregator
from app.store.base import PersistentKeyValueStore
from app.store.memory import InMemoryBackend


# ======================================================================
# Helpers
# ======================================================================


def _make_chunk(text=None, usage=None, x_groq=None):
    choices = [SimpleNamespace(delta=SimpleNamespace(content=text))] if text is not None else []
    return SimpleNamespace(choices=choices, usage=usage, model_extra={"x_groq": x_groq} if x_groq else {})


class _FakeStream:
    def __init__(self, chunks, fail_after=None):
        self.chunks = chunks
        self.fail_after = fail_after

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise ConnectionError("stream dropped")
            yield chunk


class _FakeCompletions:
    def __init__(self, chunks=(), fail_after=None, error=None):
        self.chunks = list(chunks)
        self.fail_after = fail_after
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return _FakeStream(self.chunks, self.fail_after)


def _make_assistant(**kwargs) -> tuple[PlanningAssistant, RecordRepository, _FakeCompletions]:
    repository = RecordRepository(PersistentKeyValueStore(InMemoryBackend()))
    repository.hydrate()
    completions = _FakeCompletions(**kwargs)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    assistant = PlanningAssistant(client, repository, StatsAggregator(repository), model="chat-model")
    return assistant, repository, completions


async def _collect(iterator):
    return [frame async for frame in iterator]


def _converse(assistant, content):
    return asyncio.run(_collect(assistant.converse(content)))


# ======================================================================
# _extract_usage
# ======================================================================


class TestExtractUsage:
    def test_openai_usage_field(self):
        chunk = _make_chunk(usage=SimpleNamespace(prompt_tokens=12, completion_tokens=34))
        assert _extract_usage(chunk) == TokenUsage(input_tokens=12, output_tokens=34)

    def test_groq_extension(self):
        chunk = _make_chunk(x_groq={"usage": {"prompt_tokens": 5, "completion_tokens": 6}})
        assert _extract_usage(chunk) == TokenUsage(input_tokens=5, output_tokens=6)

    def test_no_usage(self):
        assert _extract_usage(_make_chunk(text="hi")) is None


# ======================================================================
# stream_reply
# ======================================================================


class TestStreamReply:
    def test_text_then_usage(self):
        assistant, _, completions = _make_assistant(chunks=[
            _make_chunk("Squat "), _make_chunk(""), _make_chunk("5x5"),
            _make_chunk(usage=SimpleNamespace(prompt_tokens=100, completion_tokens=20)),
        ])
        messages = [ChatMessage(role=ChatRole.USER, content="Plan my day")]
        frames = asyncio.run(_collect(assistant.stream_reply(messages, "system context")))

        assert frames == [TextFrame(text="Squat "), TextFrame(text="5x5"),
                          UsageFrame(usage=TokenUsage(input_tokens=100, output_tokens=20))]
        payload = completions.calls[0]["messages"]
        assert payload[0] == {"role": "system", "content": "system context"}
        assert payload[1] == {"role": "user", "content": "Plan my day"}
        assert completions.calls[0]["stream"] is True

    def test_no_usage_frame_when_unreported(self):
        assistant, _, _ = _make_assistant(chunks=[_make_chunk("ok")])
        frames = asyncio.run(_collect(assistant.stream_reply([], "ctx")))
        assert frames == [TextFrame(text="ok")]

    def test_remote_failure_raises_collaborator_fault(self):
        assistant, _, _ = _make_assistant(error=ConnectionError("refused"))
        with pytest.raises(CollaboratorFault):
            asyncio.run(_collect(assistant.stream_reply([], "ctx")))


# ======================================================================
# converse
# ======================================================================


class TestConverse:
    def test_persists_turns_and_usage(self):
        assistant, repository, completions = _make_assistant(chunks=[
            _make_chunk("Bench "), _make_chunk("day."),
            _make_chunk(x_groq={"usage": {"prompt_tokens": 40, "completion_tokens": 8}}),
        ])
        frames = _converse(assistant, "  What today?  ")

        assert [f.type for f in frames] == ["text", "text", "usage"]
        history = repository.list_chat_messages()
        assert [(m.role, m.content) for m in history] == [
            (ChatRole.USER, "What today?"),
            (ChatRole.ASSISTANT, "Bench day."),
        ]
        assert history[1].usage == TokenUsage(input_tokens=40, output_tokens=8)
        totals = repository.get_chat_token_totals()
        assert (totals.input_tokens, totals.output_tokens) == (40, 8)
        assert "Wilks score" in completions.calls[0]["messages"][0]["content"]

    def test_history_sent_to_model(self):
        assistant, repository, completions = _make_assistant(chunks=[_make_chunk("ok")])
        repository.append_chat_message(ChatMessage(role=ChatRole.USER, content="earlier"))
        repository.append_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content="reply"))
        _converse(assistant, "next")
        contents = [m["content"] for m in completions.calls[0]["messages"][1:]]
        assert contents == ["earlier", "reply", "next"]

    def test_partial_text_kept_on_failure(self):
        assistant, repository, _ = _make_assistant(chunks=[_make_chunk("Start with "), _make_chunk("squats")],
                                                   fail_after=1)
        frames = _converse(assistant, "Plan")

        assert frames == [TextFrame(text="Start with "), ErrorFrame(message=FALLBACK_MESSAGE)]
        contents = [m.content for m in repository.list_chat_messages()]
        assert contents == ["Plan", "Start with ", FALLBACK_MESSAGE]
        assert repository.get_chat_token_totals().input_tokens == 0

    def test_failure_before_any_text(self):
        assistant, repository, _ = _make_assistant(error=TimeoutError("slow"))
        frames = _converse(assistant, "Plan")
        assert frames == [ErrorFrame(message=FALLBACK_MESSAGE)]
        assert [m.content for m in repository.list_chat_messages()] == ["Plan", FALLBACK_MESSAGE]

    def test_empty_input_rejected(self):
        assistant, repository, completions = _make_assistant()
        with pytest.raises(InvalidRequestError):
            _converse(assistant, "   ")
        assert repository.list_chat_messages() == []
        assert completions.calls == []
