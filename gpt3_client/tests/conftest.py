"""Pytest configuration for the client test suite.

Every test runs against an isolated configuration: no ``OPENAI_*`` variables
from the developer's shell, no ``.env`` file, no config file. HTTP is served
by ``httpx.MockTransport``; nothing touches the network.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Tuple

import httpx
import pytest

from gpt3_client import Gpt3Client
from gpt3_client.base.http import close_all_clients
from gpt3_client.base.logging import get_logger
from gpt3_client.config import reset_config_cache
from gpt3_client.config.env import ENV_MAP
from gpt3_client.config.layers import CONFIG_FILE_ENV
from gpt3_client.tests.utils import TEST_API_KEY, TEST_BASE_URL, Handler, ListHandler, RecordingTransport


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip config env vars and point dotenv at a file that does not exist."""
    for names in ENV_MAP.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.delenv("GPT3_LOG_LEVEL", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session", autouse=True)
def close_pooled_clients() -> Iterator[None]:
    yield
    close_all_clients()


@pytest.fixture()
def make_client() -> Callable[..., Tuple[Gpt3Client, RecordingTransport]]:
    """Factory returning ``(client, transport)`` wired to a request handler."""

    def _make(handler: Handler, **overrides: Any) -> Tuple[Gpt3Client, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = Gpt3Client(
            overrides.pop("api_key", TEST_API_KEY),
            base_url=overrides.pop("base_url", TEST_BASE_URL),
            http_client=httpx.Client(transport=transport),
            **overrides,
        )
        return client, transport

    return _make


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    """Attach a capturing handler to the shared ``gpt3`` logger."""
    base = get_logger()
    handler = ListHandler()
    base.addHandler(handler)
    previous = base.level
    base.setLevel(logging.DEBUG)
    yield handler
    base.removeHandler(handler)
    base.setLevel(previous)
