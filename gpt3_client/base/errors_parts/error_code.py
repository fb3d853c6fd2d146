"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every error raised by the
client. Values are lowercase snake_case and are considered a stable public
contract for logging and for callers branching on failure category.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    TRANSPORT = "transport"
    VALIDATION = "validation"
    ENCODING = "encoding"
    DECODING = "decoding"
    REQUEST = "request"
    STREAM = "stream"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
