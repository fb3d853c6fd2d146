"""GPT-3 REST client.

Every operation composes the same three steps:

    build_request -> perform_request -> decode_response

Streaming operations replace the decoder with the event stream reader. The
client holds only an immutable :class:`~gpt3_client.config.ClientConfig` and a
(shared, thread-safe) ``httpx.Client``, so one instance may be used from
several threads at once.

Paths:
    - ``GET  /engines``
    - ``GET  /engines/{engine}``
    - ``POST /engines/{engine}/completions``
    - ``POST /engines/{engine}/search``
    - ``POST /edits``
    - ``POST /chat/completions``

No operation retries or deduplicates. Every operation accepts an optional
``cancel`` token; a token that is already cancelled raises ``CancelledError``
before anything is sent.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .base.cancellation import CancellationToken
from .base.dto import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatCompletionStreamResponse,
    CompletionRequest,
    CompletionResponse,
    EditsRequest,
    EditsResponse,
    EngineObject,
    EnginesResponse,
    SearchRequest,
    SearchResponse,
)
from .base.errors import ValidationError, classify_exception
from .base.http import build_request, decode_response, get_httpx_client, perform_request
from .base.http.request_builder import Payload
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.streaming import EventStream, read_stream
from .config import ClientConfig

if TYPE_CHECKING:
    from .interview.models import InterviewArgs, InterviewResponse

T = TypeVar("T", bound=BaseModel)

__all__ = ["Gpt3Client"]


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000.0, 3)


class Gpt3Client:
    """Synchronous client for engines, completions, search, edits and chat.

    Construct with an API key and optional overrides, or with a prepared
    :class:`ClientConfig`::

        client = Gpt3Client("sk-...", default_engine="curie")
        client = Gpt3Client(config=ClientConfig(api_key="sk-..."))

    Missing values are resolved from the config file and the environment (see
    ``gpt3_client.config``).

    Raises:
        ValidationError: No API key could be resolved, or ``config`` was
            combined with individual options.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.Client] = None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = ClientConfig.resolve(api_key, http_client=http_client, **overrides)
        elif api_key is not None or http_client is not None or overrides:
            raise ValidationError("pass either config or individual client options, not both")
        self._config = config
        self._http = config.http_client or get_httpx_client(config.base_url)
        self._logger = get_logger("gpt3.client")

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------ engines

    def engines(self, *, cancel: Optional[CancellationToken] = None) -> EnginesResponse:
        """List the engines currently available."""
        return self._call("GET", "/engines", None, EnginesResponse, operation="engines", cancel=cancel)

    def engine(self, engine: str, *, cancel: Optional[CancellationToken] = None) -> EngineObject:
        """Retrieve one engine's details."""
        return self._call(
            "GET",
            self._engine_path(engine),
            None,
            EngineObject,
            operation="engine",
            engine=engine,
            cancel=cancel,
        )

    # -------------------------------------------------------------- completions

    def completion(
        self,
        request: CompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CompletionResponse:
        """Create a completion on the configured default engine."""
        return self.completion_with_engine(self._config.default_engine, request, cancel=cancel)

    def completion_with_engine(
        self,
        engine: str,
        request: CompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CompletionResponse:
        """Create a completion on ``engine``. ``request.stream`` is sent as false."""
        payload = request.model_copy(update={"stream": False})
        return self._call(
            "POST",
            self._engine_path(engine, "completions"),
            payload,
            CompletionResponse,
            operation="completion",
            engine=engine,
            cancel=cancel,
        )

    def completion_stream(
        self,
        request: CompletionRequest,
        on_data: Callable[[CompletionResponse], None],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Stream a completion on the default engine into ``on_data``."""
        self.completion_stream_with_engine(self._config.default_engine, request, on_data, cancel=cancel)

    def completion_stream_with_engine(
        self,
        engine: str,
        request: CompletionRequest,
        on_data: Callable[[CompletionResponse], None],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Stream a completion on ``engine``, invoking ``on_data`` once per event.

        Returns after the ``[DONE]`` terminator. ``on_data`` runs inline on the
        read loop; the next line is not read until it returns.

        Raises:
            APIError: The request was rejected.
            StreamDecodeError: An event could not be decoded; ``on_data`` is not
                called for it or for any later event.
            IncompleteStreamError: The connection closed before ``[DONE]``.
        """
        response, ctx = self._open_stream(
            self._engine_path(engine, "completions"),
            request.model_copy(update={"stream": True}),
            operation="completion_stream",
            engine=engine,
            cancel=cancel,
        )
        read_stream(response, CompletionResponse, on_data, cancel=cancel, logger=self._logger, ctx=ctx)

    def iter_completion_stream(
        self,
        request: CompletionRequest,
        *,
        engine: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> EventStream[CompletionResponse]:
        """Start a streamed completion and return its events as an iterator.

        The request is sent immediately, so request and API errors raise here;
        events are then read one line at a time as the caller iterates::

            with client.iter_completion_stream(req) as events:
                for event in events:
                    print(event.choices[0].text, end="")
        """
        engine = engine or self._config.default_engine
        response, ctx = self._open_stream(
            self._engine_path(engine, "completions"),
            request.model_copy(update={"stream": True}),
            operation="completion_stream",
            engine=engine,
            cancel=cancel,
        )
        return EventStream(response, CompletionResponse, cancel=cancel, logger=self._logger, ctx=ctx)

    # ------------------------------------------------------------------- search

    def search(
        self,
        request: SearchRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> SearchResponse:
        """Rank ``request.documents`` against the query on the default engine."""
        return self.search_with_engine(self._config.default_engine, request, cancel=cancel)

    def search_with_engine(
        self,
        engine: str,
        request: SearchRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> SearchResponse:
        return self._call(
            "POST",
            self._engine_path(engine, "search"),
            request,
            SearchResponse,
            operation="search",
            engine=engine,
            cancel=cancel,
        )

    # -------------------------------------------------------------------- edits

    def edits(self, request: EditsRequest, *, cancel: Optional[CancellationToken] = None) -> EditsResponse:
        """Rewrite ``request.input`` following ``request.instruction``."""
        return self._call("POST", "/edits", request, EditsResponse, operation="edits", engine=request.model, cancel=cancel)

    # --------------------------------------------------------------------- chat

    def chat_completion(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        payload = request.model_copy(update={"stream": False})
        return self._call(
            "POST",
            "/chat/completions",
            payload,
            ChatCompletionResponse,
            operation="chat_completion",
            engine=request.model,
            cancel=cancel,
        )

    def chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        on_data: Callable[[ChatCompletionStreamResponse], None],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Stream ``chat.completion.chunk`` events into ``on_data``."""
        response, ctx = self._open_stream(
            "/chat/completions",
            request.model_copy(update={"stream": True}),
            operation="chat_completion_stream",
            engine=request.model,
            cancel=cancel,
        )
        read_stream(response, ChatCompletionStreamResponse, on_data, cancel=cancel, logger=self._logger, ctx=ctx)

    def iter_chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> EventStream[ChatCompletionStreamResponse]:
        response, ctx = self._open_stream(
            "/chat/completions",
            request.model_copy(update={"stream": True}),
            operation="chat_completion_stream",
            engine=request.model,
            cancel=cancel,
        )
        return EventStream(response, ChatCompletionStreamResponse, cancel=cancel, logger=self._logger, ctx=ctx)

    # ---------------------------------------------------------------- interview

    def interview_questions(
        self,
        args: "InterviewArgs",
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> "InterviewResponse":
        """Generate interview questions for a job title and/or description.

        See :func:`gpt3_client.interview.interview_questions`.
        """
        from .interview.service import interview_questions

        return interview_questions(self, args, cancel=cancel)

    # ---------------------------------------------------------------- internals

    @staticmethod
    def _engine_path(engine: str, action: str = "") -> str:
        if not engine or not engine.strip():
            raise ValidationError("engine must not be empty")
        path = f"/engines/{quote(engine.strip(), safe='')}"
        return f"{path}/{action}" if action else path

    def _context(self, operation: str, method: str, path: str, engine: Optional[str]) -> LogContext:
        return LogContext(
            operation=operation,
            engine=engine,
            method=method,
            path=path,
            request_id=uuid.uuid4().hex[:12],
        )

    def _call(
        self,
        method: str,
        path: str,
        payload: Payload,
        model: Type[T],
        *,
        operation: str,
        engine: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> T:
        ctx = self._context(operation, method, path, engine)
        start = time.perf_counter()
        normalized_log_event(self._logger, "request.start", ctx, phase="start")
        try:
            request = build_request(self._http, self._config, method, path, payload)
            response = perform_request(self._http, request, cancel=cancel)
            result = decode_response(response, model, cancel=cancel)
        except Exception as e:
            normalized_log_event(
                self._logger,
                "request.error",
                ctx,
                phase="request",
                error_code=classify_exception(e).value,
                error=str(e),
                latency_ms=_elapsed_ms(start),
            )
            raise
        normalized_log_event(
            self._logger,
            "request.end",
            ctx,
            phase="finalize",
            emitted=True,
            usage=getattr(result, "usage", None),
            latency_ms=_elapsed_ms(start),
        )
        return result

    def _open_stream(
        self,
        path: str,
        payload: Payload,
        *,
        operation: str,
        engine: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> Tuple[httpx.Response, LogContext]:
        ctx = self._context(operation, "POST", path, engine)
        start = time.perf_counter()
        try:
            request = build_request(self._http, self._config, "POST", path, payload)
            response = perform_request(self._http, request, cancel=cancel)
        except Exception as e:
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                error_code=classify_exception(e).value,
                emitted=0,
                error=str(e),
                latency_ms=_elapsed_ms(start),
            )
            raise
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            latency_ms=_elapsed_ms(start),
        )
        return response, ctx
