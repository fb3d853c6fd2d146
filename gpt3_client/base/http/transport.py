"""Request execution and status handling.

``perform_request`` sends a built request with a streaming body so that both
single-shot decoding and line-by-line stream reading can consume it. Only
2xx responses are returned; anything else is drained, closed and turned into
an :class:`~gpt3_client.base.errors.APIError`.

No retries are attempted; callers own retry policy.
"""

from __future__ import annotations

from typing import Optional

import httpx
import pydantic

from ..cancellation import CancellationToken
from ..dto.error_envelope import APIErrorEnvelope
from ..errors import APIError, TransportError, UNEXPECTED_ERROR_TYPE, classify_exception


def _transport_error(e: httpx.HTTPError, prefix: str = "") -> TransportError:
    message = str(e) or e.__class__.__name__
    return TransportError(f"{prefix}{message}", code=classify_exception(e), raw=e)


def error_from_body(status_code: int, body: bytes) -> APIError:
    """Build an ``APIError`` from a non-2xx body.

    A well-formed ``{"error": {...}}`` envelope supplies message and type;
    anything else yields type ``"Unexpected"`` with the raw body as message.
    """
    try:
        envelope = APIErrorEnvelope.model_validate_json(body)
    except pydantic.ValidationError:
        return APIError(
            message=body.decode("utf-8", errors="replace"),
            status_code=status_code,
            type=UNEXPECTED_ERROR_TYPE,
        )
    return APIError(
        message=envelope.error.message,
        status_code=status_code,
        type=envelope.error.type,
    )


def check_for_success(response: httpx.Response) -> None:
    """Return silently for 2xx; otherwise read, close and raise.

    Raises:
        APIError: Non-2xx status.
        TransportError: The error body could not be read.
    """
    if 200 <= response.status_code < 300:
        return
    try:
        body = response.read()
    except httpx.TransportError as e:
        raise _transport_error(e, "failed to read from body: ") from e
    finally:
        response.close()
    raise error_from_body(response.status_code, body)


def perform_request(
    http_client: httpx.Client,
    request: httpx.Request,
    *,
    cancel: Optional[CancellationToken] = None,
) -> httpx.Response:
    """Send ``request`` and return the open 2xx response.

    The caller owns the returned response and must close it (the decoder and
    the stream reader both do).

    ``cancel`` is checked before sending and again once the response headers
    arrive. A blocking ``send`` cannot be interrupted; it is bounded only by the
    request timeout.

    Raises:
        CancelledError: ``cancel`` was cancelled before sending (nothing is
            sent) or while the request was in flight (the response is closed).
        TransportError: Connection, timeout or protocol failure.
        APIError: Non-2xx status.
    """
    if cancel is not None:
        cancel.raise_if_cancelled()
    try:
        response = http_client.send(request, stream=True)
    except httpx.TransportError as e:
        raise _transport_error(e) from e
    if cancel is not None and cancel.cancelled:
        response.close()
        cancel.raise_if_cancelled()
    check_for_success(response)
    return response


__all__ = ["perform_request", "check_for_success", "error_from_body"]
