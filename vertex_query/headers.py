"""Merge framework and caller headers for a Vertex request."""

from __future__ import annotations

import logging

from vertex_query.constants import (
    GOOGLE_INTERNAL_ENDPOINT,
    SERVER_RESERVED_HEADERS,
    X_GOOG_API_CLIENT_HEADER,
)
from vertex_query.types import ClientError, Headers, RequestOptions

logger = logging.getLogger(__name__)


def has_line_break(value: str | None) -> bool:
    if value is None:
        return False
    return "\n" in value or "\r" in value


def _headers_have_line_break(headers: Headers) -> bool:
    return any(has_line_break(name) or has_line_break(value) for name, value in headers)


def resolve_headers(
    base_endpoint: str,
    required_headers: Headers,
    request_options: RequestOptions | None = None,
) -> Headers:
    """Return the full header set for a request.

    Custom headers are appended to the required ones and the API client
    string, if any, is sent as X-Goog-Api-Client. For the server reserved
    headers (Authorization, Content-Type) a single source wins: the caller's
    custom headers when ``base_endpoint`` is on the public googleapis.com
    domain, the required headers otherwise.

    Raises:
        ClientError: If the API client string or any custom header name or
            value contains a line break.
    """
    api_client = request_options.api_client if request_options else None
    custom_headers = Headers(request_options.custom_headers if request_options else None)

    if has_line_break(api_client):
        logger.warning("Rejected apiClient request option containing a line break")
        raise ClientError(
            "Found line break in apiClient request option field, please remove "
            "the line break and try again."
        )
    if _headers_have_line_break(custom_headers):
        logger.warning("Rejected customHeaders request option containing a line break")
        raise ClientError(
            "Found line break in customHeaders request option field, please remove "
            "the line break and try again."
        )

    total_headers = required_headers.copy()
    for name, value in custom_headers:
        total_headers.append(name, value)
    if api_client:
        total_headers.append(X_GOOG_API_CLIENT_HEADER, api_client)

    if base_endpoint.endswith(GOOGLE_INTERNAL_ENDPOINT):
        golden_headers = custom_headers
    else:
        golden_headers = required_headers
    for name in SERVER_RESERVED_HEADERS:
        value = golden_headers.get(name)
        if value is not None:
            total_headers.set(name, value)

    return total_headers
