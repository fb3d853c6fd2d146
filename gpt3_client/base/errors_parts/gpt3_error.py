"""
Root exception type for the client.

Every failure surfaced by ``gpt3_client`` derives from `Gpt3Error` so callers
can catch the whole family at once while still branching on the concrete
subclass or on the normalized `ErrorCode`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class Gpt3Error(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        raw: Optional underlying exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


__all__ = ["Gpt3Error"]
