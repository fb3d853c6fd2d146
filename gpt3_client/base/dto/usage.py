"""Token accounting block shared by completion, edits and chat responses."""

from __future__ import annotations

from .base import ResponseModel


class Usage(ResponseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


__all__ = ["Usage"]
