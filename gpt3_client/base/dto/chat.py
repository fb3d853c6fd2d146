"""
Chat completion DTOs (``POST /chat/completions``).

The non-streaming response carries a full ``message`` per choice; streamed
``chat.completion.chunk`` events carry an incremental ``delta`` instead.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .base import ResponseModel, WireModel
from .usage import Usage

Role = Literal["system", "user", "assistant"]


class ChatCompletionRequestMessage(WireModel):
    role: Role
    content: str
    name: Optional[str] = None


class ChatCompletionRequest(WireModel):
    """Request body for the chat completions API.

    ``stream`` is overwritten by the client, as for ``CompletionRequest``.
    """

    model: str = Field(..., min_length=1)
    messages: List[ChatCompletionRequestMessage] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    n: Optional[int] = Field(default=None, ge=1)
    stop: Optional[List[str]] = Field(default=None, max_length=4)
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    stream: bool = False
    user: Optional[str] = None


class ChatCompletionResponseMessage(ResponseModel):
    role: str
    content: str = ""


class ChatCompletionResponseChoice(ResponseModel):
    index: int = 0
    message: ChatCompletionResponseMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(ResponseModel):
    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: List[ChatCompletionResponseChoice]
    usage: Optional[Usage] = None


class ChatCompletionStreamChoiceDelta(ResponseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class ChatCompletionStreamChoice(ResponseModel):
    index: int = 0
    delta: ChatCompletionStreamChoiceDelta
    finish_reason: Optional[str] = None


class ChatCompletionStreamResponse(ResponseModel):
    id: str = ""
    object: str = "chat.completion.chunk"
    created: int = 0
    model: str = ""
    choices: List[ChatCompletionStreamChoice]


__all__ = [
    "Role",
    "ChatCompletionRequestMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponseMessage",
    "ChatCompletionResponseChoice",
    "ChatCompletionResponse",
    "ChatCompletionStreamChoiceDelta",
    "ChatCompletionStreamChoice",
    "ChatCompletionStreamResponse",
]
