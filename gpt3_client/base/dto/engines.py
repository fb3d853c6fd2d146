"""Engine listing DTOs (``GET /engines`` and ``GET /engines/{id}``)."""

from __future__ import annotations

from typing import List, Optional

from .base import ResponseModel


class EngineObject(ResponseModel):
    """A single engine entry.

    Attributes:
        id: Engine identifier usable in completion/search paths.
        object: Object type tag (``"engine"``).
        owner: Owning organization.
        ready: Whether the engine is currently available.
    """

    id: str
    object: str = "engine"
    owner: Optional[str] = None
    ready: bool = False


class EnginesResponse(ResponseModel):
    data: List[EngineObject]
    object: str = "list"


__all__ = ["EngineObject", "EnginesResponse"]
