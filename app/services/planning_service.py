"""
Planning assistant service.

Streams a conversational reply from the remote model as structured
frames (see :mod:`app.schemas.chat`) and keeps the persisted chat
history and token totals in step with what was streamed.
"""

import logging
from typing import Any, AsyncIterator, Optional

from app.core.exceptions import CollaboratorFault, InvalidRequestError
from app.db.repositories.records import RecordRepository
from app.schemas.chat import ChatMessage, ChatRole, ErrorFrame, TextFrame, TokenUsage, UsageFrame
from app.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)

SERVICE_NAME = "planning"
FALLBACK_MESSAGE = "Sorry, an error occurred. Please try again."


def _extract_usage(chunk: Any) -> Optional[TokenUsage]:
    """Token usage carried by a stream chunk, if any.

    OpenAI reports it in ``usage`` on the last chunk; Groq also sends it
    as ``x_groq.usage``, which the SDK keeps in ``model_extra``.
    """
    usage = getattr(chunk, "usage", None)
    if usage is None:
        extra = getattr(chunk, "model_extra", None) or {}
        usage = (extra.get("x_groq") or {}).get("usage")
    if usage is None:
        return None

    if isinstance(usage, dict):
        prompt, completion = usage.get("prompt_tokens"), usage.get("completion_tokens")
    else:
        prompt, completion = getattr(usage, "prompt_tokens", None), getattr(usage, "completion_tokens", None)
    return TokenUsage(input_tokens=prompt or 0, output_tokens=completion or 0)


def _delta_text(chunk: Any) -> str:
    choices = getattr(chunk, "choices", None) or []
    if not choices:
        return ""
    delta = getattr(choices[0], "delta", None)
    return getattr(delta, "content", None) or ""


class PlanningAssistant:
    """Chat collaborator that co-designs training plans with the user."""

    def __init__(self, client: Any, repository: RecordRepository, aggregator: StatsAggregator, model: str,
                 max_tokens: int = 1024, ):
        self.client = client
        self.repository = repository
        self.aggregator = aggregator
        self.model = model
        self.max_tokens = max_tokens

    async def stream_reply(self, messages: list[ChatMessage], system_context: str, ) -> AsyncIterator[Any]:
        """Yield ``TextFrame`` per non-empty delta, then at most one ``UsageFrame``.

        Raises:
            CollaboratorFault: If the remote call fails at any point.
        """
        payload = [{"role": "system", "content": system_context}]
        payload += [{"role": m.role.value, "content": m.content} for m in messages]

        usage: Optional[TokenUsage] = None
        try:
            stream = await self.client.chat.completions.create(model=self.model, max_tokens=self.max_tokens,
                                                               messages=payload, stream=True,
                                                               stream_options={"include_usage": True}, )
            async for chunk in stream:
                text = _delta_text(chunk)
                if text:
                    yield TextFrame(text=text)
                usage = _extract_usage(chunk) or usage
        except Exception as e:
            logger.exception("Planning reply stream failed")
            raise CollaboratorFault(SERVICE_NAME, FALLBACK_MESSAGE, str(e)) from e

        if usage is not None:
            yield UsageFrame(usage=usage)

    async def converse(self, content: str) -> AsyncIterator[Any]:
        """Run one user turn end to end.

        Appends the user message, re-yields the reply frames and persists
        the assistant message with its usage.  On a collaborator fault the
        text received so far is kept as its own message, the fallback
        message is appended once and an ``ErrorFrame`` closes the stream.

        Raises:
            InvalidRequestError: If *content* is empty after trimming.
        """
        text = (content or "").strip()
        if not text:
            raise InvalidRequestError("Message content is required")

        self.repository.append_chat_message(ChatMessage(role=ChatRole.USER, content=text))
        history = self.repository.list_chat_messages()
        context = self.aggregator.planning_context()

        parts: list[str] = []
        usage: Optional[TokenUsage] = None
        try:
            async for frame in self.stream_reply(history, context):
                if isinstance(frame, TextFrame):
                    parts.append(frame.text)
                elif isinstance(frame, UsageFrame):
                    usage = frame.usage
                yield frame
        except CollaboratorFault as e:
            if parts:
                self.repository.append_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content="".join(parts)))
            self.repository.append_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content=e.user_message))
            yield ErrorFrame(message=e.user_message)
            return

        self.repository.append_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content="".join(parts), usage=usage))
        if usage is not None:
            self.repository.add_chat_token_usage(usage)
        logger.debug("Planning reply persisted (%d chars)", sum(len(p) for p in parts))
