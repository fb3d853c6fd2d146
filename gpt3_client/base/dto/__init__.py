"""Pydantic wire DTOs for every API surface the client speaks."""

from .base import ResponseModel, WireModel
from .usage import Usage
from .engines import EngineObject, EnginesResponse
from .completion import CompletionRequest, CompletionResponse, CompletionResponseChoice
from .search import SearchData, SearchRequest, SearchResponse
from .edits import EditsChoice, EditsRequest, EditsResponse
from .chat import (
    ChatCompletionRequest,
    ChatCompletionRequestMessage,
    ChatCompletionResponse,
    ChatCompletionResponseChoice,
    ChatCompletionResponseMessage,
    ChatCompletionStreamChoice,
    ChatCompletionStreamChoiceDelta,
    ChatCompletionStreamResponse,
    Role,
)
from .error_envelope import APIErrorBody, APIErrorEnvelope

__all__ = [
    "WireModel",
    "ResponseModel",
    "Usage",
    "EngineObject",
    "EnginesResponse",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionResponseChoice",
    "SearchRequest",
    "SearchData",
    "SearchResponse",
    "EditsRequest",
    "EditsChoice",
    "EditsResponse",
    "Role",
    "ChatCompletionRequestMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponseMessage",
    "ChatCompletionResponseChoice",
    "ChatCompletionResponse",
    "ChatCompletionStreamChoiceDelta",
    "ChatCompletionStreamChoice",
    "ChatCompletionStreamResponse",
    "APIErrorBody",
    "APIErrorEnvelope",
]
