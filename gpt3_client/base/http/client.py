"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so every ``Gpt3Client`` pointing at the same API root shares one
    connection pool instead of allocating its own.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Pooled clients carry no timeout of their own. The request builder
      attaches the configured per-request timeout to every request, so two
      ``Gpt3Client`` instances with different timeouts can share a pool.

Lifecycle & cleanup:
    - Clients are cached by ``base_url``.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      also call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``base_url``.

    The first request for a key creates the client; subsequent requests reuse
    the same instance. Safe for concurrent use; per-key creation is guarded by
    a re-entrant lock.
    """
    client = _CLIENTS.get(base_url)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(base_url)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=None)
        _CLIENTS[base_url] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
