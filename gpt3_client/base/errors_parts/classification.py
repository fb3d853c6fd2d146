"""Map arbitrary exceptions onto :class:`ErrorCode`.

Client errors carry their own code. Everything else (httpx failures, errors
raised from ``on_data`` callbacks or a custom transport) is classified by type,
then by any HTTP status it exposes, then by its message text.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .gpt3_error import Gpt3Error

STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# First match wins; every keyword in a group must appear in the message.
_MESSAGE_HINTS: Tuple[Tuple[Tuple[str, ...], ErrorCode], ...] = (
    (("rate", "limit"), ErrorCode.RATE_LIMIT),
    (("timeout",), ErrorCode.TIMEOUT),
    (("timed out",), ErrorCode.TIMEOUT),
    (("api key",), ErrorCode.AUTH),
    (("unauthorized",), ErrorCode.AUTH),
    (("not found",), ErrorCode.NOT_FOUND),
    (("unavailable",), ErrorCode.UNAVAILABLE),
    (("invalid",), ErrorCode.VALIDATION),
    (("malformed",), ErrorCode.VALIDATION),
)


def _valid_status(value: object) -> Optional[int]:
    if isinstance(value, int) and 100 <= value < 600:
        return value
    return None


def status_of(exc: BaseException) -> Optional[int]:
    """HTTP status exposed by ``exc`` as ``status_code``, ``status`` or
    ``response.status_code``; ``None`` when there is none."""
    for candidate in (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    ):
        status = _valid_status(candidate)
        if status is not None:
            return status
    return None


def code_for_status(status: int) -> ErrorCode:
    """Code for an HTTP status. Unlisted 5xx is ``SERVER_ERROR``, others ``UNKNOWN``."""
    code = STATUS_CODES.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN


def code_from_message(message: str) -> Optional[ErrorCode]:
    text = message.lower()
    for keywords, code in _MESSAGE_HINTS:
        if all(k in text for k in keywords):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Return the :class:`ErrorCode` that best describes ``exc``.

    ``Gpt3Error`` keeps its own code. Cancellation, timeouts and other httpx
    transport failures are recognised by type. Anything else falls back to its
    HTTP status, then to message keywords, then ``UNKNOWN``.
    """
    if isinstance(exc, Gpt3Error):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT
    status = status_of(exc)
    if status is not None:
        return code_for_status(status)
    return code_from_message(str(exc)) or ErrorCode.UNKNOWN


__all__ = [
    "STATUS_CODES",
    "classify_exception",
    "code_for_status",
    "code_from_message",
    "status_of",
]
