"""Server-sent-event stream reader for streaming completions.

The API streams one JSON event per line, each prefixed with ``data: ``, and
ends the stream with the line ``data: [DONE]``. This module turns such a body
into decoded response objects.

Per line the reader moves through three states:

``READING``
    Read the next ``\\n``-terminated line and trim surrounding whitespace.
    Lines without the ``data: `` prefix (blank keep-alives, ``event:``,
    ``id:``, comments) are discarded. A ``[DONE]`` payload moves to ``DONE``;
    any other payload is decoded and handed to the consumer before the next
    line is read.
``DONE``
    Terminal success.
``FAILED``
    Terminal failure. Reached on a read error, on a malformed payload
    (``StreamDecodeError``) and on end-of-file before ``[DONE]``
    (``IncompleteStreamError``). A connection that closes early is never
    reported as a completed stream.

Events are produced lazily: the next line is not read until the consumer has
finished with the current event, so memory stays bounded to one line and a
slow consumer throttles the read loop. Cancellation is checked at every line
boundary. The response is closed on every exit path.
"""

from __future__ import annotations

import logging
from contextlib import closing
from enum import Enum
from typing import Callable, Generic, Iterator, Optional, Type, TypeVar

import httpx
import pydantic

from ...config.defaults import STREAM_DATA_PREFIX, STREAM_DONE_SENTINEL
from ..cancellation import CancellationToken
from ..constants import INVALID_STREAM_DATA_ERROR
from ..errors import (
    Gpt3Error,
    IncompleteStreamError,
    StreamDecodeError,
    TransportError,
    classify_exception,
)
from ..logging import LogContext, get_logger, normalized_log_event
from .stream_metrics import StreamMetrics

T = TypeVar("T", bound=pydantic.BaseModel)

DATA_PREFIX = STREAM_DATA_PREFIX.encode("ascii")
DONE_SENTINEL = STREAM_DONE_SENTINEL.encode("ascii")
LINE_TERMINATOR = b"\n"

# Payload excerpt kept in StreamDecodeError messages.
_PAYLOAD_EXCERPT = 200


class StreamState(str, Enum):
    READING = "reading"
    DONE = "done"
    FAILED = "failed"


def iter_frames(
    response: httpx.Response,
    *,
    cancel: Optional[CancellationToken] = None,
) -> Iterator[bytes]:
    """Yield each ``\\n``-terminated line of the body, terminator excluded.

    Bytes after the last terminator are an incomplete line and are never
    yielded; the generator simply ends, leaving the caller to decide what an
    early end-of-file means.

    Raises:
        CancelledError: ``cancel`` was cancelled at a line boundary.
        TransportError: The body could not be read.
    """
    buffer = b""
    chunks = response.iter_bytes()
    while True:
        while LINE_TERMINATOR in buffer:
            if cancel is not None:
                cancel.raise_if_cancelled()
            line, buffer = buffer.split(LINE_TERMINATOR, 1)
            yield line
        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            chunk = next(chunks, None)
        except httpx.TransportError as e:
            raise TransportError(str(e) or e.__class__.__name__, code=classify_exception(e), raw=e) from e
        if chunk is None:
            return
        buffer += chunk


def _decode_event(payload: bytes, model: Type[T]) -> T:
    try:
        return model.model_validate_json(payload)
    except pydantic.ValidationError as e:
        text = payload.decode("utf-8", errors="replace")
        excerpt = text if len(text) <= _PAYLOAD_EXCERPT else text[:_PAYLOAD_EXCERPT] + "..."
        raise StreamDecodeError(
            f"{INVALID_STREAM_DATA_ERROR}: {e.error_count()} error(s) decoding {excerpt!r}: {e}",
            raw=e,
            payload=text,
        ) from e


def iter_stream(
    response: httpx.Response,
    model: Type[T],
    *,
    cancel: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> Iterator[T]:
    """Decode a streaming body into a finite, non-restartable sequence of events.

    Parameters:
        response: Open 2xx response whose body is the event stream. Owned by
            this generator from the first ``next()`` on; it is closed when the
            stream terminates, fails, or the generator is closed early.
        model: Response model each ``data:`` payload is validated against.
        cancel: Optional token checked at every line boundary.
        logger: Logger for ``stream.end`` / ``stream.error`` events.
        ctx: Log context of the originating operation.

    Raises:
        StreamDecodeError: A payload was not valid JSON for ``model``. No
            event is yielded for that frame or any later one.
        IncompleteStreamError: The body ended before ``data: [DONE]``.
        TransportError: Reading the body failed.
        CancelledError: ``cancel`` was cancelled.
    """
    log = logger or get_logger("gpt3.stream")
    metrics = StreamMetrics()
    state = StreamState.READING
    try:
        for raw in iter_frames(response, cancel=cancel):
            line = raw.strip()
            if not line.startswith(DATA_PREFIX):
                metrics.record_skip()
                continue
            payload = line[len(DATA_PREFIX):]
            if payload == DONE_SENTINEL:
                state = StreamState.DONE
                break
            event = _decode_event(payload, model)
            metrics.record_event()
            yield event
        if state is not StreamState.DONE:
            raise IncompleteStreamError(
                f"stream ended before {STREAM_DONE_SENTINEL} terminator (unexpected EOF)"
            )
    except Exception as e:
        metrics.finish()
        normalized_log_event(
            log,
            "stream.error",
            ctx,
            phase="mid_stream",
            error_code=classify_exception(e).value,
            emitted=metrics.emitted,
            error=str(e),
            metrics=metrics.to_dict(),
            handled=isinstance(e, Gpt3Error),
        )
        raise
    finally:
        response.close()
    metrics.finish()
    normalized_log_event(
        log,
        "stream.end",
        ctx,
        phase="finalize",
        emitted=metrics.emitted,
        metrics=metrics.to_dict(),
    )


def read_stream(
    response: httpx.Response,
    model: Type[T],
    on_data: Callable[[T], None],
    *,
    cancel: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> None:
    """Callback form of :func:`iter_stream`.

    ``on_data`` is invoked synchronously, once per event, in receipt order.
    Returns once the terminator is seen. An exception raised by ``on_data``
    stops the stream, closes the response and propagates unchanged.
    """
    delivered = 0
    with closing(iter_stream(response, model, cancel=cancel, logger=logger, ctx=ctx)) as events:
        for event in events:
            try:
                on_data(event)
            except Exception as e:
                normalized_log_event(
                    logger or get_logger("gpt3.stream"),
                    "stream.error",
                    ctx,
                    phase="mid_stream",
                    error_code=classify_exception(e).value,
                    emitted=delivered,
                    error=str(e),
                    source="on_data",
                    handled=isinstance(e, Gpt3Error),
                )
                raise
            delivered += 1


class EventStream(Generic[T]):
    """Iterable handle over an open event stream.

    Returned by the iterator-style streaming operations once the request has
    been accepted. Iterate it once; use it as a context manager (or call
    :meth:`close`) to release the connection when stopping early. Closing a
    stream that was never iterated still closes the response.
    """

    def __init__(
        self,
        response: httpx.Response,
        model: Type[T],
        *,
        cancel: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._response = response
        self._events = iter_stream(response, model, cancel=cancel, logger=logger, ctx=ctx)

    def __iter__(self) -> "EventStream[T]":
        return self

    def __next__(self) -> T:
        return next(self._events)

    def close(self) -> None:
        self._events.close()
        self._response.close()

    def __enter__(self) -> "EventStream[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "StreamState",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "EventStream",
    "iter_frames",
    "iter_stream",
    "read_stream",
]
