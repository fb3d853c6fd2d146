"""Edits DTOs (``POST /edits``)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import ResponseModel, WireModel
from .usage import Usage


class EditsRequest(WireModel):
    """Rewrite ``input`` following ``instruction`` using ``model``."""

    model: str = Field(..., min_length=1)
    input: str = ""
    instruction: str = Field(..., min_length=1)
    n: Optional[int] = Field(default=None, ge=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class EditsChoice(ResponseModel):
    text: str = ""
    index: int = 0


class EditsResponse(ResponseModel):
    object: str = "edit"
    created: int = 0
    choices: List[EditsChoice]
    usage: Optional[Usage] = None


__all__ = ["EditsRequest", "EditsChoice", "EditsResponse"]
