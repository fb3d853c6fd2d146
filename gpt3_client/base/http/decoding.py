"""Single-body JSON decoding into typed response models."""

from __future__ import annotations

from typing import Optional, Type, TypeVar

import httpx
import pydantic

from ..cancellation import CancellationToken
from ..constants import INVALID_RESPONSE_ERROR
from ..errors import DecodingError, TransportError, classify_exception

T = TypeVar("T", bound=pydantic.BaseModel)


def _read_body(response: httpx.Response, cancel: Optional[CancellationToken]) -> bytes:
    if cancel is None:
        return response.read()
    chunks = []
    for chunk in response.iter_bytes():
        cancel.raise_if_cancelled()
        chunks.append(chunk)
    cancel.raise_if_cancelled()
    return b"".join(chunks)


def decode_response(
    response: httpx.Response,
    model: Type[T],
    *,
    cancel: Optional[CancellationToken] = None,
) -> T:
    """Read the whole body of ``response`` and validate it as ``model``.

    With ``cancel`` the body is read chunk by chunk and the token is checked
    after each chunk, so a token cancelled mid-download stops the read. The
    response is closed on every path.

    Raises:
        CancelledError: ``cancel`` was cancelled before the body was decoded.
        DecodingError: The body is not JSON or does not match ``model``.
        TransportError: The body could not be read.
    """
    try:
        body = _read_body(response, cancel)
        return model.model_validate_json(body)
    except pydantic.ValidationError as e:
        raise DecodingError(f"{INVALID_RESPONSE_ERROR}: {e}", raw=e) from e
    except httpx.TransportError as e:
        raise TransportError(str(e) or e.__class__.__name__, code=classify_exception(e), raw=e) from e
    finally:
        response.close()


__all__ = ["decode_response"]
