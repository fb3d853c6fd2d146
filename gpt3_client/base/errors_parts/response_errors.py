"""
Errors raised while decoding a successful (2xx) response body.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .gpt3_error import Gpt3Error


@dataclass(eq=False)
class DecodingError(Gpt3Error):
    """The body was not well-formed JSON or did not match the expected shape."""

    code: ErrorCode = ErrorCode.DECODING


@dataclass(eq=False)
class StreamDecodeError(Gpt3Error):
    """A ``data:`` frame mid-stream carried a malformed payload.

    Attributes:
        payload: The offending payload text (prefix already stripped).
    """

    code: ErrorCode = ErrorCode.STREAM
    payload: str = ""


__all__ = ["DecodingError", "StreamDecodeError"]
