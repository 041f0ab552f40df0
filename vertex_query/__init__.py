"""vertex-query: authenticated POST requests to Vertex AI with abort and timeout support."""

from __future__ import annotations

from vertex_query.cancellation import AbortSetup, compose_abort
from vertex_query.client import GenerativeModelClient
from vertex_query.constants import (
    COUNT_TOKENS_METHOD,
    GENERATE_CONTENT_METHOD,
    STREAMING_GENERATE_CONTENT_METHOD,
    USER_AGENT,
)
from vertex_query.headers import resolve_headers
from vertex_query.request import build_endpoint_url, close_shared_transport, post_request
from vertex_query.transport import HTTPTransport, get_default_transport
from vertex_query.types import (
    AbortController,
    AbortError,
    AbortSignal,
    ClientError,
    Headers,
    RequestOptions,
    VertexQueryError,
)

__all__ = [
    # Requests
    "post_request",
    "build_endpoint_url",
    "close_shared_transport",
    "resolve_headers",
    "compose_abort",
    "AbortSetup",
    # Client
    "GenerativeModelClient",
    # Transports
    "HTTPTransport",
    "get_default_transport",
    # Types
    "AbortController",
    "AbortSignal",
    "Headers",
    "RequestOptions",
    # Errors
    "VertexQueryError",
    "ClientError",
    "AbortError",
    # Constants
    "GENERATE_CONTENT_METHOD",
    "STREAMING_GENERATE_CONTENT_METHOD",
    "COUNT_TOKENS_METHOD",
    "USER_AGENT",
]
