"""gpt3_client.config.env
======================

Environment variable mapping for client settings.

Purpose
-------
- Single source of truth mapping each configurable field to its environment
  variable names (canonical first, then accepted aliases).
- Small helpers to resolve those values consistently.

Design Notes
------------
- ``API_KEY`` is accepted as an alias of ``OPENAI_API_KEY``; the canonical
  name wins when both are set.
- Values that look like placeholders (``changeme``, ``example`` ...) are
  treated as unset so template ``.env`` files do not leak into requests.

Failure Modes
-------------
Helpers never raise on unset variables; the caller decides how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Config field -> ordered env var names (canonical first)
ENV_MAP: Dict[str, Tuple[str, ...]] = {
    "api_key": ("OPENAI_API_KEY", "API_KEY"),  # pragma: allowlist secret - env var names, not secrets
    "base_url": ("OPENAI_BASE_URL",),
    "default_engine": ("OPENAI_ENGINE",),
    "organization": ("OPENAI_ORGANIZATION",),
    "user_agent": ("OPENAI_USER_AGENT",),
    "timeout_seconds": ("OPENAI_TIMEOUT_SECONDS",),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(field: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a config field."""
    yield from ENV_MAP.get(field, ())


def resolve_env_value(field: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a config field from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate, or ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(field):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val.strip(), name
    return None, None


def env_overrides() -> Dict[str, str]:
    """Return every config field that has a usable environment value."""
    out: Dict[str, str] = {}
    for field in ENV_MAP:
        val, _ = resolve_env_value(field)
        if val is not None:
            out[field] = val
    return out


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env_value",
    "env_overrides",
]
