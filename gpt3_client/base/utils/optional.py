"""Helpers for optional (present/absent) values.

Optional request knobs are plain ``Optional[...]`` fields; substituting a
default is done here, in one place, instead of ``is None`` checks at every
call site.
"""

from __future__ import annotations

from typing import Optional, TypeVar

T = TypeVar("T")


def value_or_default(value: Optional[T], default: T) -> T:
    """Return ``value`` when present, otherwise ``default``.

    Only ``None`` counts as absent; falsy values such as ``0`` or ``""`` are
    returned unchanged.
    """
    return default if value is None else value


__all__ = ["value_or_default"]
