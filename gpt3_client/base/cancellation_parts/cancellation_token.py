"""Cooperative cancellation token passed to client operations.

A token may be cancelled from any thread. Operations poll it at their
blocking boundaries: once before the request is sent and, while streaming,
before each line is read. There is no mid-line interruption; a read already
in progress finishes (or hits the transport timeout) first.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancellation flag with parent → child propagation.

    Child tokens let a caller scope one token per request under a session
    token: cancelling the session cancels every request, not the reverse.

    Example::

        session = CancellationToken()
        token = session.child()
        threading.Timer(5.0, token.cancel, args=("deadline",)).start()
        client.completion_stream(request, on_data, cancel=token)
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given to the first :meth:`cancel` call, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel this token and its children. Only the first call has effect."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` so it is cancelled with this one; returns ``token``."""
        with self._lock:
            self._children.append(token)
            already = self._event.is_set()
        if already:
            token.cancel(self._reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; returns :attr:`cancelled`."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
