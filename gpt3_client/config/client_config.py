"""Immutable client configuration.

``ClientConfig`` replaces ad-hoc keyword plumbing with one frozen object that
is resolved once at client construction and never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import ValidationError
from .defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_ENGINE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from .layers import get_client_config


def _coerce_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"invalid timeout_seconds: {value!r}", raw=e) from e
    if timeout <= 0:
        raise ValidationError(f"timeout_seconds must be positive, got {timeout}")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a :class:`~gpt3_client.client.Gpt3Client`.

    Attributes:
        api_key: Secret used for bearer authentication. Required.
        base_url: API root; request paths are appended to it.
        user_agent: Value of the ``User-Agent`` header.
        default_engine: Engine used by operations that take no explicit engine.
        organization: Optional organization id sent as ``OpenAI-Organization``.
        timeout_seconds: httpx timeout applied to each phase of a request
            (connect, write, pool, and every individual read). It is not a
            deadline for the whole exchange: a stream that keeps delivering
            lines can run longer.
        http_client: Optional caller-owned ``httpx.Client``. When omitted a
            pooled client keyed by base URL is used.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    default_engine: str = DEFAULT_ENGINE
    organization: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    http_client: Optional[httpx.Client] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.api_key or not str(self.api_key).strip():
            raise ValidationError(MISSING_API_KEY_ERROR)
        object.__setattr__(self, "base_url", str(self.base_url).rstrip("/"))
        object.__setattr__(self, "timeout_seconds", _coerce_timeout(self.timeout_seconds))

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        **overrides: Any,
    ) -> "ClientConfig":
        """Build a config from defaults, config file, environment and overrides.

        Raises:
            ValidationError: No API key could be resolved, or an override is
                not a recognised field, or the timeout is not a positive number.
        """
        unknown = set(overrides) - {
            "base_url",
            "user_agent",
            "default_engine",
            "organization",
            "timeout_seconds",
        }
        if unknown:
            raise ValidationError(f"unknown client option(s): {', '.join(sorted(unknown))}")
        cfg = get_client_config({"api_key": api_key, **overrides})
        return cls(
            api_key=cfg.get("api_key") or "",
            base_url=cfg["base_url"],
            user_agent=cfg["user_agent"],
            default_engine=cfg["default_engine"],
            organization=cfg.get("organization") or None,
            timeout_seconds=cfg["timeout_seconds"],
            http_client=http_client,
        )


__all__ = ["ClientConfig"]
