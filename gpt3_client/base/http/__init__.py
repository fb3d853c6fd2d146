"""HTTP plumbing: pooled clients, request building, sending and decoding."""

from .client import close_all_clients, get_httpx_client
from .decoding import decode_response
from .request_builder import build_headers, build_request, encode_payload
from .transport import check_for_success, error_from_body, perform_request

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "build_request",
    "build_headers",
    "encode_payload",
    "perform_request",
    "check_for_success",
    "error_from_body",
    "decode_response",
]
