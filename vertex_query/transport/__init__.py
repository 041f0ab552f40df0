"""HTTP transport abstraction for vertex-query.

Transports wrap an HTTP client library so the request layer can send a POST
and cancel it through an AbortSignal without knowing which library is used:

- aiohttp (default)
- httpx

Usage:
    from vertex_query.transport import get_default_transport

    transport = get_default_transport()
    response = await transport.post(url, headers=headers, data=body)
"""

from .base import HTTPTransport

__all__ = ["HTTPTransport", "get_default_transport"]


def get_default_transport(name: str = "aiohttp") -> HTTPTransport:
    """Get a transport by client library name.

    Args:
        name: "aiohttp" or "httpx".

    Returns:
        HTTPTransport: AioHTTPTransport or HTTPXTransport.

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "aiohttp":
        from .aiohttp_transport import AioHTTPTransport

        return AioHTTPTransport()

    if name == "httpx":
        from .httpx_transport import HTTPXTransport

        return HTTPXTransport()

    raise ValueError(f"Unknown transport: {name}. Available: aiohttp, httpx")
