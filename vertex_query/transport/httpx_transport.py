"""HTTP transport using httpx."""

from __future__ import annotations

import httpx

from vertex_query.types import AbortSignal, Headers

from .base import HTTPTransport


class HTTPXTransport(HTTPTransport):
    """HTTP transport backed by an ``httpx.AsyncClient``.

    Example:
        transport = HTTPXTransport(client=httpx.AsyncClient(proxy="http://proxy:3128"))
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """Initialize the transport.

        Args:
            client: Optional existing httpx client to reuse. It is not closed
                    by ``close()``.
        """
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Deadlines come from the request's abort signal.
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    async def post(
        self,
        url: str,
        *,
        headers: Headers,
        data: str,
        signal: AbortSignal | None = None,
    ) -> httpx.Response:
        """Send a POST request and return the streaming ``httpx.Response``."""
        client = await self._get_client()
        request = client.build_request("POST", url, headers=headers.items(), content=data)

        async def send() -> httpx.Response:
            return await client.send(request, stream=True)

        return await self._send_abortable(send, signal)

    async def close(self) -> None:
        """Close the underlying client if we own it."""
        if self._owns_client and self._client:
            await self._client.aclose()
            self._client = None
