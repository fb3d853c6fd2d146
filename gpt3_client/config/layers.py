"""Layered configuration loading.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``GPT3_CONFIG_FILE``; either a flat mapping or an ``openai`` section
    3. Environment variables (see ``config.env.ENV_MAP``)
    4. In-code overrides passed to :func:`get_client_config`

A ``.env`` file (path from ``DOTENV_FILE``, default ``.env``) is loaded once
before the environment is consulted. Existing variables are only replaced when
they hold placeholder values.

Example config file::

    openai:
      base_url: https://api.openai.com/v1
      default_engine: curie
      organization: org-123
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_ENGINE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from .env import ENV_MAP, env_overrides, is_placeholder

CONFIG_FILE_ENV = "GPT3_CONFIG_FILE"
CONFIG_FILE_SECTION = "openai"

DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "user_agent": DEFAULT_USER_AGENT,
    "default_engine": DEFAULT_ENGINE,
    "organization": None,
    "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse ``KEY=VALUE`` lines from the dotenv file into ``os.environ``.

    Comments and blank lines are ignored. Safe to call repeatedly.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # YAML is a superset of JSON; anything json rejected gets a second chance.
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        data = {}
    section = data.get(CONFIG_FILE_SECTION, data)
    _FILE_CACHE = {k: v for k, v in section.items() if k in ENV_MAP} if isinstance(section, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged raw configuration mapping.

    ``None`` values in ``overrides`` are ignored so callers can pass through
    optional arguments unconditionally.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "DEFAULTS",
    "CONFIG_FILE_ENV",
    "get_client_config",
    "reset_config_cache",
]
