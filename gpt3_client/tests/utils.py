"""Shared helpers for the client tests.

Exports:
    - ``RecordingTransport``: ``httpx.MockTransport`` that keeps served requests
    - ``ListHandler``: logging handler collecting structured events
    - ``sse`` / ``completion_event``: builders for streamed bodies
    - ``TrackingStream``: response body stream that records ``close()``
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional

import httpx

Handler = Callable[[httpx.Request], httpx.Response]

TEST_API_KEY = "sk-unit"  # pragma: allowlist secret - fake key for tests
TEST_BASE_URL = "https://api.test/v1"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


class TrackingStream(httpx.SyncByteStream):
    """Body stream yielding fixed chunks, optionally failing after them."""

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None) -> None:
        self._chunks = list(chunks)
        self._error = error
        self.closed = False
        self.chunks_read = 0

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            self.chunks_read += 1
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.closed = True


class ListHandler(logging.Handler):
    """Capture log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self, name: Optional[str] = None) -> List[dict]:
        out = []
        for msg in self.messages:
            try:
                data = json.loads(msg)
            except ValueError:
                continue
            if isinstance(data, dict) and (name is None or data.get("event") == name):
                out.append(data)
        return out


def sse(*payloads: str, done: bool = True) -> bytes:
    """Build a ``data:`` event stream body from JSON payload strings."""
    lines = [f"data: {p}\n" for p in payloads]
    if done:
        lines.append("data: [DONE]\n")
    return "".join(lines).encode("utf-8")


def completion_event(text: str, index: int = 0) -> str:
    return json.dumps(
        {
            "id": "cmpl-1",
            "object": "text_completion",
            "created": 1,
            "model": "davinci",
            "choices": [{"text": text, "index": index, "logprobs": None, "finish_reason": None}],
        }
    )


def stream_response(chunks: Iterable[bytes], error: Optional[Exception] = None) -> "tuple[httpx.Response, TrackingStream]":
    """A 200 response whose body is served chunk by chunk."""
    stream = TrackingStream(chunks, error)
    request = httpx.Request("POST", f"{TEST_BASE_URL}/engines/davinci/completions")
    return httpx.Response(200, stream=stream, request=request), stream


def json_response(status: int, data: Any) -> httpx.Response:
    return httpx.Response(status, json=data)
