"""Unified client error taxonomy public surface.

This module re-exports the implementations under
``gpt3_client.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    APIError,
    DecodingError,
    EncodingError,
    ErrorCode,
    Gpt3Error,
    IncompleteStreamError,
    RequestConstructionError,
    StreamDecodeError,
    TransportError,
    UNEXPECTED_ERROR_TYPE,
    ValidationError,
    classify_exception,
    code_for_status,
)
from .cancellation import CancelledError

__all__ = [
    "ErrorCode",
    "Gpt3Error",
    "APIError",
    "UNEXPECTED_ERROR_TYPE",
    "ValidationError",
    "EncodingError",
    "RequestConstructionError",
    "DecodingError",
    "StreamDecodeError",
    "TransportError",
    "IncompleteStreamError",
    "CancelledError",
    "classify_exception",
    "code_for_status",
]
