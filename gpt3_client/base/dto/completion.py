"""
Completion DTOs (``POST /engines/{engine}/completions``).

``CompletionRequest.stream`` is owned by the client: the sync operations send
``false`` and the streaming operations send ``true`` whatever the caller set.
The same ``CompletionResponse`` shape is used for the single response and for
every streamed event.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ResponseModel, WireModel
from .usage import Usage


class CompletionRequest(WireModel):
    """Request body for the completions API.

    Attributes:
        prompt: Prompts to complete.
        max_tokens: Upper bound on generated tokens.
        temperature: Sampling temperature.
        top_p: Nucleus sampling mass; alternative to ``temperature``.
        n: Number of choices to generate per prompt.
        logprobs: Include log probabilities of the most likely tokens.
        echo: Echo the prompt back in addition to the completion.
        stop: Up to 4 sequences where generation stops.
        presence_penalty: Penalizes tokens that already appeared.
        frequency_penalty: Penalizes tokens by their frequency so far.
        stream: Overwritten by the client; do not set.
        user: Opaque end-user identifier.
    """

    prompt: List[str] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    n: Optional[int] = Field(default=None, ge=1)
    logprobs: Optional[int] = Field(default=None, ge=0)
    echo: bool = False
    stop: Optional[List[str]] = Field(default=None, max_length=4)
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    stream: bool = False
    user: Optional[str] = None


class CompletionResponseChoice(ResponseModel):
    text: str = ""
    index: int = 0
    logprobs: Optional[Dict[str, Any]] = None
    finish_reason: Optional[str] = None


class CompletionResponse(ResponseModel):
    id: str = ""
    object: str = "text_completion"
    created: int = 0
    model: str = ""
    choices: List[CompletionResponseChoice]
    usage: Optional[Usage] = None


__all__ = ["CompletionRequest", "CompletionResponseChoice", "CompletionResponse"]
