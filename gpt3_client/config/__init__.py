"""Configuration layer for the client.

Public API
----------
* ``ClientConfig`` - frozen settings object consumed by ``Gpt3Client``
* ``ClientConfig.resolve(api_key=None, **overrides)`` - layered resolution
* ``get_client_config(overrides)`` - raw merged mapping
* ``reset_config_cache()`` - drop cached file / dotenv state
"""
from __future__ import annotations

from .layers import DEFAULTS, get_client_config, reset_config_cache
from .client_config import ClientConfig

__all__ = [
    "ClientConfig",
    "DEFAULTS",
    "get_client_config",
    "reset_config_cache",
]
