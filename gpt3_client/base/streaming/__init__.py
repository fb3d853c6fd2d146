"""Streaming package: SSE line framing, event decoding and stream metrics."""

from .stream_metrics import StreamMetrics
from .stream_reader import (
    DATA_PREFIX,
    DONE_SENTINEL,
    EventStream,
    StreamState,
    iter_frames,
    iter_stream,
    read_stream,
)

__all__ = [
    "StreamMetrics",
    "StreamState",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "EventStream",
    "iter_frames",
    "iter_stream",
    "read_stream",
]
