"""Document search DTOs (``POST /engines/{engine}/search``)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import ResponseModel, WireModel


class SearchRequest(WireModel):
    """Semantic search over ``documents`` for ``query``."""

    documents: List[str] = Field(..., min_length=1)
    query: str
    user: Optional[str] = None


class SearchData(ResponseModel):
    """Score for one document; ``document`` is its index in the request."""

    document: int
    object: str = "search_result"
    score: float


class SearchResponse(ResponseModel):
    data: List[SearchData]
    object: str = "list"


__all__ = ["SearchRequest", "SearchData", "SearchResponse"]
