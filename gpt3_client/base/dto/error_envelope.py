"""Error envelope returned by the API on non-2xx responses.

``{"error": {"message": "...", "type": "...", "param": null, "code": null}}``
"""

from __future__ import annotations

from typing import Optional, Union

from .base import ResponseModel


class APIErrorBody(ResponseModel):
    message: str
    type: str = ""
    param: Optional[str] = None
    code: Optional[Union[str, int]] = None


class APIErrorEnvelope(ResponseModel):
    error: APIErrorBody


__all__ = ["APIErrorBody", "APIErrorEnvelope"]
