"""
Errors raised by the network layer.

`TransportError` wraps connection, timeout and read failures reported by
``httpx``; the original exception is kept in ``raw``. `IncompleteStreamError`
reports a streaming body that ended before the ``[DONE]`` terminator.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .gpt3_error import Gpt3Error


@dataclass(eq=False)
class TransportError(Gpt3Error):
    """Network or connection failure passed through from the HTTP client."""

    code: ErrorCode = ErrorCode.TRANSPORT


@dataclass(eq=False)
class IncompleteStreamError(TransportError):
    """The stream reached end-of-file without a terminator line."""


__all__ = ["TransportError", "IncompleteStreamError"]
