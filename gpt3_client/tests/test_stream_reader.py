"""Tests for the ``data:`` event stream reader.

Covers:
- one handler call per frame, in order, with the decoded payload
- non-data lines ignored, ``[DONE]`` terminates successfully
- end-of-file without ``[DONE]`` is an error, never a silent success
- a malformed frame stops delivery for it and every later frame
- read failures, cancellation and early close all release the body
"""
from __future__ import annotations

import httpx
import pytest

from gpt3_client import CompletionResponse
from gpt3_client.base.cancellation import CancellationToken, CancelledError
from gpt3_client.base.errors import IncompleteStreamError, StreamDecodeError, TransportError
from gpt3_client.base.streaming import EventStream, iter_frames, iter_stream, read_stream
from gpt3_client.tests.utils import completion_event, sse, stream_response


def _texts(events):
    return [e.choices[0].text for e in events]


def test_frames_delivered_in_order_exactly_once():
    body = sse(completion_event("Hello"), completion_event(","), completion_event(" world"))
    response, stream = stream_response([body])
    received = []

    read_stream(response, CompletionResponse, received.append)

    assert _texts(received) == ["Hello", ",", " world"]  # nosec B101
    assert received[0] == CompletionResponse.model_validate_json(completion_event("Hello"))  # nosec B101
    assert stream.closed  # nosec B101


def test_frames_split_across_chunks():
    body = sse(completion_event("a"), completion_event("b"))
    chunks = [body[i : i + 7] for i in range(0, len(body), 7)]
    response, _ = stream_response(chunks)
    assert _texts(iter_stream(response, CompletionResponse)) == ["a", "b"]  # nosec B101


def test_non_data_lines_are_ignored():
    body = (
        b": keep-alive comment\n"
        b"\n"
        b"event: completion\n"
        b"id: 42\n"
        b"   data: " + completion_event("x").encode() + b"  \r\n"
        b"retry: 1000\n"
        b"data: [DONE]\n"
    )
    response, _ = stream_response([body])
    assert _texts(iter_stream(response, CompletionResponse)) == ["x"]  # nosec B101


def test_terminator_only_stream_completes_empty():
    response, stream = stream_response([b"\n\n: ping\ndata: [DONE]\n"])
    received = []
    read_stream(response, CompletionResponse, received.append)
    assert received == [] and stream.closed  # nosec B101


def test_lines_after_terminator_are_not_read():
    body = sse(completion_event("a")) + b"data: {not json}\n"
    response, _ = stream_response([body])
    assert _texts(iter_stream(response, CompletionResponse)) == ["a"]  # nosec B101


@pytest.mark.parametrize(
    "tail",
    [b"", b"data: [DO", b"data: [DONE]"],
    ids=["clean-eof", "partial-line", "unterminated-done"],
)
def test_eof_without_terminator_is_an_error(tail):
    body = sse(completion_event("a"), done=False) + tail
    response, stream = stream_response([body])
    received = []
    with pytest.raises(IncompleteStreamError):
        read_stream(response, CompletionResponse, received.append)
    assert _texts(received) == ["a"]  # nosec B101
    assert stream.closed  # nosec B101


def test_incomplete_stream_is_a_transport_error():
    response, _ = stream_response([b""])
    with pytest.raises(TransportError):
        list(iter_stream(response, CompletionResponse))


@pytest.mark.parametrize("bad", ["{not json", '{"choices": "nope"}', "[1, 2]"])
def test_malformed_frame_halts_without_later_callbacks(bad):
    body = sse(completion_event("first"), bad, completion_event("never"))
    response, stream = stream_response([body])
    received = []
    with pytest.raises(StreamDecodeError) as info:
        read_stream(response, CompletionResponse, received.append)
    assert _texts(received) == ["first"]  # nosec B101
    assert info.value.payload == bad  # nosec B101
    assert "invalid json stream data" in info.value.message  # nosec B101
    assert stream.closed  # nosec B101


def test_read_failure_mid_stream_propagates_as_transport_error():
    response, stream = stream_response(
        [sse(completion_event("a"), done=False)],
        error=httpx.ReadError("connection reset"),
    )
    received = []
    with pytest.raises(TransportError) as info:
        read_stream(response, CompletionResponse, received.append)
    assert not isinstance(info.value, IncompleteStreamError)  # nosec B101
    assert isinstance(info.value.raw, httpx.ReadError)  # nosec B101
    assert _texts(received) == ["a"] and stream.closed  # nosec B101


def test_handler_exception_propagates_and_closes_body():
    response, stream = stream_response([sse(completion_event("a"), completion_event("b"))])

    class Boom(Exception):
        pass

    def _handler(event):
        raise Boom()

    with pytest.raises(Boom):
        read_stream(response, CompletionResponse, _handler)
    assert stream.closed  # nosec B101


def test_cancellation_checked_between_lines():
    token = CancellationToken()
    response, stream = stream_response([sse(completion_event("a"), completion_event("b"))])
    received = []

    def _handler(event):
        received.append(event)
        token.cancel("enough")

    with pytest.raises(CancelledError):
        read_stream(response, CompletionResponse, _handler, cancel=token)
    assert _texts(received) == ["a"] and stream.closed  # nosec B101


def test_iterator_is_lazy():
    chunks = [sse(completion_event("a"), done=False), sse(completion_event("b"))]
    response, stream = stream_response(chunks)
    events = iter_stream(response, CompletionResponse)
    assert stream.chunks_read == 0  # nosec B101
    assert next(events).choices[0].text == "a"  # nosec B101
    assert stream.chunks_read == 1  # nosec B101
    assert _texts(events) == ["b"]  # nosec B101


def test_iterator_close_releases_body_early():
    response, stream = stream_response([sse(completion_event("a"), completion_event("b"))])
    events = iter_stream(response, CompletionResponse)
    next(events)
    events.close()
    assert stream.closed  # nosec B101


def test_event_stream_closes_even_if_never_iterated():
    response, stream = stream_response([sse(completion_event("a"))])
    with EventStream(response, CompletionResponse):
        pass
    assert stream.closed  # nosec B101


def test_iter_frames_drops_unterminated_fragment():
    response, _ = stream_response([b"one\ntw", b"o\nthree"])
    assert list(iter_frames(response)) == [b"one", b"two"]  # nosec B101


def test_stream_events_logged(log_capture):
    response, _ = stream_response([sse(completion_event("a"), completion_event("b"))])
    list(iter_stream(response, CompletionResponse))
    (end,) = log_capture.events("stream.end")
    assert end["emitted"] == 2 and end["phase"] == "finalize"  # nosec B101

    response, _ = stream_response([sse(completion_event("a"), done=False)])
    with pytest.raises(IncompleteStreamError):
        list(iter_stream(response, CompletionResponse))
    (err,) = log_capture.events("stream.error")
    assert err["error_code"] == "transport" and err["emitted"] == 1  # nosec B101


def test_handler_failure_is_logged_as_mid_stream_error(log_capture):
    response, stream = stream_response([sse(completion_event("a"), completion_event("b"))])
    seen = []

    def _handler(event):
        seen.append(event)
        if len(seen) == 2:
            raise ValueError("consumer rejected event")

    with pytest.raises(ValueError):
        read_stream(response, CompletionResponse, _handler)

    (err,) = log_capture.events("stream.error")
    assert err["phase"] == "mid_stream" and err["emitted"] == 1  # nosec B101
    assert err["source"] == "on_data" and err["handled"] is False  # nosec B101
    assert log_capture.events("stream.end") == [] and stream.closed  # nosec B101
