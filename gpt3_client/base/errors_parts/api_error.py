"""
Error returned by the remote API for non-2xx responses.

The server wraps failures in an envelope of the form
``{"error": {"message": ..., "type": ...}}``. `APIError` mirrors the inner
object and adds the HTTP status observed on the response.
"""
from __future__ import annotations

from dataclasses import dataclass

from .classification import code_for_status
from .error_code import ErrorCode
from .gpt3_error import Gpt3Error

UNEXPECTED_ERROR_TYPE = "Unexpected"


@dataclass(eq=False)
class APIError(Gpt3Error):
    """Non-2xx response from the API.

    Attributes:
        status_code: HTTP status code of the response.
        type: Machine-readable category reported by the server, or
            ``"Unexpected"`` when the body was not a valid error envelope.

    The normalized ``code`` is derived from ``status_code`` unless given.
    """

    status_code: int = 0
    type: str = ""

    def __post_init__(self) -> None:
        if self.code is ErrorCode.UNKNOWN:
            self.code = code_for_status(self.status_code)

    def __str__(self) -> str:
        return f"[{self.status_code}:{self.type}] {self.message}"


__all__ = ["APIError", "UNEXPECTED_ERROR_TYPE"]
