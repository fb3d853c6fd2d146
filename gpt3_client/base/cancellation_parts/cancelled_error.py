"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of an in-flight request or stream.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancelled token.

    Distinct from transport failures so callers can tell a deliberate abort
    from a broken connection.
    """

__all__ = ["CancelledError"]
