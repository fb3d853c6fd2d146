"""
Client base package.

Holds the layers every operation is composed from:

- ``dto``: pydantic request/response models
- ``errors``: the ``Gpt3Error`` taxonomy and exception classification
- ``cancellation``: cooperative cancellation tokens
- ``logging``: structured JSON logging
- ``http``: request building, sending and response decoding
- ``streaming``: the ``data:`` event stream reader

Import the subpackages directly; this module re-exports only the leaf-level
pieces that carry no dependency on configuration.
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorCode, Gpt3Error

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "Gpt3Error",
]
