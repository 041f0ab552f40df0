"""POST requests to the Vertex AI prediction service."""

from __future__ import annotations

import json
import logging
from typing import Any

from vertex_query.cancellation import compose_abort
from vertex_query.constants import (
    API_BASE_PATH,
    AUTHORIZATION_HEADER,
    CONTENT_TYPE_HEADER,
    DEFAULT_API_VERSION,
    STREAMING_GENERATE_CONTENT_METHOD,
    USER_AGENT,
    USER_AGENT_HEADER,
)
from vertex_query.headers import has_line_break, resolve_headers
from vertex_query.transport import HTTPTransport, get_default_transport
from vertex_query.types import ClientError, Headers, RawResponse, RequestOptions

logger = logging.getLogger(__name__)


# Shared transport used when the caller does not pass one
_default_transport: HTTPTransport | None = None


def get_shared_transport() -> HTTPTransport:
    """Return the process-wide default transport, creating it on first use."""
    global _default_transport

    if _default_transport is None:
        _default_transport = get_default_transport()
    return _default_transport


async def close_shared_transport() -> None:
    """Close the shared transport. The next request creates a fresh one."""
    global _default_transport

    transport, _default_transport = _default_transport, None
    if transport is not None:
        await transport.close()


def build_endpoint_url(
    *,
    base_endpoint: str,
    resource_path: str,
    resource_method: str,
    api_version: str = DEFAULT_API_VERSION,
) -> str:
    """Build the full request URL.

    Streaming generation asks for server-sent events with ``alt=sse``.
    """
    url = f"https://{base_endpoint}/{api_version}/{resource_path}:{resource_method}"
    if resource_method == STREAMING_GENERATE_CONTENT_METHOD:
        url += "?alt=sse"
    return url


async def post_request(
    *,
    region: str,
    resource_path: str,
    resource_method: str,
    token: str | None,
    data: dict[str, Any],
    api_endpoint: str | None = None,
    request_options: RequestOptions | None = None,
    api_version: str = DEFAULT_API_VERSION,
    transport: HTTPTransport | None = None,
) -> RawResponse:
    """Make a POST request to a Vertex AI service.

    Args:
        region: Location used to build the default host, e.g. "us-central1".
        resource_path: Path of the resource, e.g.
            "projects/p/locations/us-central1/publishers/google/models/gemini-pro".
        resource_method: Method called on the resource, e.g. "generateContent".
        token: Bearer token. Sent as given; None is not rejected.
        data: Request payload, serialized as JSON.
        api_endpoint: Host to use instead of "{region}-aiplatform.googleapis.com".
        request_options: Custom headers, API client, timeout and abort signal.
        api_version: API version path segment.
        transport: Transport to send with. Defaults to the shared transport.

    Returns:
        The transport's raw response. Status and body are left to the caller.

    Raises:
        ClientError: If the token or the request options contain a line
            break. Nothing is sent in that case.
        AbortError: If the request is aborted or times out.
    """
    if api_endpoint is None:
        base_endpoint = f"{region}-{API_BASE_PATH}"
    else:
        base_endpoint = api_endpoint
    url = build_endpoint_url(
        base_endpoint=base_endpoint,
        resource_path=resource_path,
        resource_method=resource_method,
        api_version=api_version,
    )

    if has_line_break(token):
        logger.warning("Rejected bearer token containing a line break")
        raise ClientError("Found line break in token, please remove the line break and try again.")

    necessary_headers = Headers(
        [
            (AUTHORIZATION_HEADER, f"Bearer {token}"),
            (CONTENT_TYPE_HEADER, "application/json"),
            (USER_AGENT_HEADER, USER_AGENT),
        ]
    )
    total_headers = resolve_headers(base_endpoint, necessary_headers, request_options)

    setup = compose_abort(request_options)
    try:
        if transport is None:
            transport = get_shared_transport()

        logger.debug(
            "POST %s (timeout=%s, signal=%s)",
            url,
            request_options.timeout if request_options else None,
            setup.signal is not None,
        )
        return await transport.post(
            url,
            headers=total_headers,
            data=json.dumps(data),
            signal=setup.signal,
        )
    finally:
        # Listeners on the caller's signal and pending timers must not outlive the request.
        setup.clear_listener()
        setup.clear_timer()
