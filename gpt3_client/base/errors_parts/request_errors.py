"""
Errors raised before a request leaves the process.

These cover bad caller input, payloads that cannot be serialized and requests
the transport refuses to construct (for example a malformed base URL).
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .gpt3_error import Gpt3Error


@dataclass(eq=False)
class ValidationError(Gpt3Error):
    """Caller input failed validation; no network call was issued."""

    code: ErrorCode = ErrorCode.VALIDATION


@dataclass(eq=False)
class EncodingError(Gpt3Error):
    """The request payload could not be serialized to JSON."""

    code: ErrorCode = ErrorCode.ENCODING


@dataclass(eq=False)
class RequestConstructionError(Gpt3Error):
    """The HTTP request could not be built (invalid URL, unsupported scheme)."""

    code: ErrorCode = ErrorCode.REQUEST


__all__ = ["ValidationError", "EncodingError", "RequestConstructionError"]
