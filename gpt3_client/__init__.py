"""gpt3_client package

Client library for the GPT-3 REST API: engines, completions (sync and
streaming), document search, edits, chat completions, and interview-question
generation.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`Gpt3Client`, :class:`ClientConfig`
    - Exceptions: :class:`Gpt3Error` and its subclasses, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Wire models from ``gpt3_client.base.dto``
    - Interview feature types from ``gpt3_client.interview``

Example::

    from gpt3_client import CompletionRequest, Gpt3Client

    client = Gpt3Client("sk-...")
    resp = client.completion(CompletionRequest(prompt=["Hello"], max_tokens=5))
    print(resp.choices[0].text)
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import (
    ChatCompletionRequest,
    ChatCompletionRequestMessage,
    ChatCompletionResponse,
    ChatCompletionStreamResponse,
    CompletionRequest,
    CompletionResponse,
    CompletionResponseChoice,
    EditsRequest,
    EditsResponse,
    EngineObject,
    EnginesResponse,
    SearchData,
    SearchRequest,
    SearchResponse,
    Usage,
)
from .base.errors import (
    APIError,
    DecodingError,
    EncodingError,
    ErrorCode,
    Gpt3Error,
    IncompleteStreamError,
    RequestConstructionError,
    StreamDecodeError,
    TransportError,
    ValidationError,
)
from .base.streaming import EventStream
from .client import Gpt3Client
from .config import ClientConfig
from .config.defaults import (
    ADA_ENGINE,
    BABBAGE_ENGINE,
    CURIE_ENGINE,
    DAVINCI_ENGINE,
    DAVINCI_INSTRUCT_ENGINE,
    DEFAULT_ENGINE,
    GPT3_DOT_5_TURBO,
    INTERVIEW_ENGINE,
    TEXT_DAVINCI_EDIT_001,
)
from .interview import InterviewArgs, InterviewInput, InterviewQuestion, InterviewResponse

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "Gpt3Client",
    "ClientConfig",
    "EventStream",
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Exceptions
    "ErrorCode",
    "Gpt3Error",
    "APIError",
    "ValidationError",
    "EncodingError",
    "DecodingError",
    "RequestConstructionError",
    "TransportError",
    "IncompleteStreamError",
    "StreamDecodeError",
    # Wire models
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
    "EditsResponse",
    "ChatCompletionRequest",
    "ChatCompletionRequestMessage",
    "ChatCompletionResponse",
    "ChatCompletionStreamResponse",
    # Interview
    "InterviewArgs",
    "InterviewInput",
    "InterviewQuestion",
    "InterviewResponse",
    # Engines
    "ADA_ENGINE",
    "BABBAGE_ENGINE",
    "CURIE_ENGINE",
    "DAVINCI_ENGINE",
    "DAVINCI_INSTRUCT_ENGINE",
    "DEFAULT_ENGINE",
    "INTERVIEW_ENGINE",
    "TEXT_DAVINCI_EDIT_001",
    "GPT3_DOT_5_TURBO",
]
