"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `gpt3_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .gpt3_error import Gpt3Error
from .api_error import APIError, UNEXPECTED_ERROR_TYPE
from .request_errors import ValidationError, EncodingError, RequestConstructionError
from .response_errors import DecodingError, StreamDecodeError
from .transport_error import TransportError, IncompleteStreamError
from .classification import classify_exception, code_for_status

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
    "classify_exception",
    "code_for_status",
]
