"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs accepted by every client operation via the
canonical ``gpt3_client.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is checked before a request is sent and, for streaming
  operations, at every line-read boundary. There is no mid-line cancellation.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
