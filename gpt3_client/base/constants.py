"""Base shared constants.

Central location for sentinel strings shared between layers.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential message
MISSING_API_KEY_ERROR = "missing api key: pass api_key or set OPENAI_API_KEY"  # pragma: allowlist secret - message text, not a secret

# Interview feature input guard
MISSING_INTERVIEW_INPUT_ERROR = "must specify a job title or description"

# Prefix used when a stream frame fails to decode
INVALID_STREAM_DATA_ERROR = "invalid json stream data"

# Prefix used when a response body fails to decode
INVALID_RESPONSE_ERROR = "invalid json response"

__all__ = [
    "MISSING_API_KEY_ERROR",
    "MISSING_INTERVIEW_INPUT_ERROR",
    "INVALID_STREAM_DATA_ERROR",
    "INVALID_RESPONSE_ERROR",
]
