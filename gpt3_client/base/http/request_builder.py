"""Outbound request construction.

``build_request`` turns a method, a path and an optional payload into an
``httpx.Request`` carrying the client's credentials. It performs no I/O.

Headers:
    - ``Authorization: Bearer <api_key>``
    - ``Content-Type: application/json``
    - ``User-Agent: <user_agent>``
    - ``OpenAI-Organization: <organization>`` only when one is configured

Failure modes:
    - ``EncodingError`` when the payload cannot be serialized to JSON.
    - ``RequestConstructionError`` when the resulting URL is malformed or does
      not use http(s).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from ...config.defaults import ORGANIZATION_HEADER
from ..dto.base import WireModel
from ..errors import EncodingError, RequestConstructionError
from ..utils import value_or_default

if TYPE_CHECKING:
    from ...config.client_config import ClientConfig

Payload = Union[BaseModel, Mapping[str, Any], None]


def encode_payload(payload: Payload) -> bytes:
    """Return the JSON body for ``payload``; an absent payload is an empty body."""
    if payload is None:
        return b""
    try:
        if isinstance(payload, WireModel):
            data: Any = payload.to_wire()
        elif isinstance(payload, BaseModel):
            data = payload.model_dump(mode="json", exclude_none=True)
        else:
            data = payload
        return json.dumps(data, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        # PydanticSerializationError is a ValueError
        raise EncodingError(f"failed encoding json: {e}", raw=e) from e


def build_headers(config: "ClientConfig") -> Dict[str, str]:
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
        "User-Agent": config.user_agent,
    }
    if config.organization:
        headers[ORGANIZATION_HEADER] = config.organization
    return headers


def build_request(
    http_client: httpx.Client,
    config: "ClientConfig",
    method: str,
    path: str,
    payload: Payload = None,
    *,
    timeout: Optional[float] = None,
) -> httpx.Request:
    """Construct a transport-ready request for ``config.base_url + path``.

    Parameters:
        http_client: Client used to build (and later send) the request.
        config: Credentials, base URL and default timeout.
        method: HTTP method (``"GET"``, ``"POST"``).
        path: API path beginning with ``/``.
        payload: Request DTO, plain mapping, or ``None`` for no body.
        timeout: Overrides ``config.timeout_seconds`` for this request.

    Raises:
        EncodingError: The payload is not JSON serializable.
        RequestConstructionError: The URL cannot be used for an HTTP request.
    """
    body = encode_payload(payload)
    url = config.base_url + path
    try:
        request = http_client.build_request(
            method,
            url,
            content=body,
            headers=build_headers(config),
            timeout=value_or_default(timeout, config.timeout_seconds),
        )
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError) as e:
        raise RequestConstructionError(f"cannot build request for {url!r}: {e}", raw=e) from e
    if request.url.scheme not in ("http", "https") or not request.url.host:
        raise RequestConstructionError(f"cannot build request for {url!r}: expected an http(s) URL")
    return request


__all__ = ["Payload", "encode_payload", "build_headers", "build_request"]
