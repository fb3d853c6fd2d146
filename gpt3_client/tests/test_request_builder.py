"""Tests for outbound request construction."""
from __future__ import annotations

import json
import math

import httpx
import pytest

from gpt3_client import ClientConfig, CompletionRequest
from gpt3_client.base.errors import EncodingError, RequestConstructionError
from gpt3_client.base.http import build_headers, build_request, encode_payload


@pytest.fixture()
def http_client():
    with httpx.Client() as client:
        yield client


def _config(**kwargs) -> ClientConfig:
    return ClientConfig(api_key="sk-test", base_url="https://api.test/v1", **kwargs)


def test_headers_carry_credentials_and_user_agent():
    headers = build_headers(_config(user_agent="my-agent/1.0"))
    assert headers == {  # nosec B101
        "Authorization": "Bearer sk-test",
        "Content-Type": "application/json",
        "User-Agent": "my-agent/1.0",
    }


def test_organization_header_only_when_configured():
    assert "OpenAI-Organization" not in build_headers(_config())  # nosec B101
    assert build_headers(_config(organization="org-1"))["OpenAI-Organization"] == "org-1"  # nosec B101


def test_absent_payload_is_empty_body(http_client):
    request = build_request(http_client, _config(), "GET", "/engines")
    assert request.method == "GET"  # nosec B101
    assert str(request.url) == "https://api.test/v1/engines"  # nosec B101
    assert request.read() == b""  # nosec B101
    assert request.headers["authorization"] == "Bearer sk-test"  # nosec B101


def test_payload_serialized_without_none_fields(http_client):
    payload = CompletionRequest(prompt=["Hello"], max_tokens=5)
    request = build_request(http_client, _config(), "POST", "/engines/davinci/completions", payload)
    body = json.loads(request.read())
    assert body["prompt"] == ["Hello"]  # nosec B101
    assert body["max_tokens"] == 5  # nosec B101
    assert "temperature" not in body and "user" not in body  # nosec B101


def test_request_timeout_comes_from_config(http_client):
    request = build_request(http_client, _config(timeout_seconds=7), "GET", "/engines")
    assert request.extensions["timeout"]["read"] == 7.0  # nosec B101


def test_mapping_payload_and_encoding_failure():
    assert json.loads(encode_payload({"a": 1})) == {"a": 1}  # nosec B101
    with pytest.raises(EncodingError):
        encode_payload({"bad": object()})
    with pytest.raises(EncodingError):
        encode_payload({"nan": math.nan})


@pytest.mark.parametrize("base_url", ["ftp://api.test/v1", "not a url", "/relative/only"])
def test_unusable_url_raises_request_construction_error(http_client, base_url):
    config = ClientConfig(api_key="sk-test", base_url=base_url)
    with pytest.raises(RequestConstructionError):
        build_request(http_client, config, "GET", "/engines")
