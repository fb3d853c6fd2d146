"""Common pydantic bases for wire DTOs.

Requests are plain mutable models; responses are frozen so a decoded result
cannot be altered after the fact. Both ignore unknown keys, which keeps the
client working when the API adds fields.

Constructing a request with out-of-range values raises
``pydantic.ValidationError``, which is not a ``Gpt3Error``; it is raised by the
caller's own constructor call, before the client is involved.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping sent on the wire (``None`` fields omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


class ResponseModel(BaseModel):
    """Base for decoded responses: immutable, compared structurally."""

    model_config = ConfigDict(extra="ignore", frozen=True)


__all__ = ["WireModel", "ResponseModel"]
