"""
Planning-assistant chat schemas.

A reply streams as a sequence of frames::

    TextFrame* [UsageFrame] | TextFrame* ErrorFrame

Text frames are usable as soon as they arrive; token usage is a separate
terminal frame rather than a marker embedded in the text.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class TokenUsage(BaseModel):
    """Token counts reported for one completion."""

    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)


class ChatTokenTotals(BaseModel):
    """Running token totals across the whole chat history."""

    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)

    def add(self, usage: TokenUsage) -> "ChatTokenTotals":
        return ChatTokenTotals(input_tokens=self.input_tokens + usage.input_tokens,
                               output_tokens=self.output_tokens + usage.output_tokens, )


class ChatMessage(BaseModel):
    role: ChatRole
    content: str
    usage: Optional[TokenUsage] = None


class ChatRequest(BaseModel):
    content: str = Field(..., max_length=4000)


# ----------------------------------------------------------------------
# Stream frames
# ----------------------------------------------------------------------

class TextFrame(BaseModel):
    type: Literal["text"] = "text"
    text: str


class UsageFrame(BaseModel):
    type: Literal["usage"] = "usage"
    usage: TokenUsage


class ErrorFrame(BaseModel):
    type: Literal["error"] = "error"
    message: str


StreamFrame = Annotated[Union[TextFrame, UsageFrame, ErrorFrame], Field(discriminator="type")]
