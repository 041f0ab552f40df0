"""HTTP transport using aiohttp."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from vertex_query.types import AbortSignal, Headers

from .base import HTTPTransport

logger = logging.getLogger(__name__)


class AioHTTPTransport(HTTPTransport):
    """HTTP transport using aiohttp.

    This is the default transport. The session is created on first use and
    reused until ``close()``. A session this transport created is replaced
    when it is used from a different event loop than the one it was bound to.
    Timeouts are left to the abort signal, so owned sessions have no total
    timeout of their own.
    """

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self._session = session
        self._owns_session = session is None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        loop = asyncio.get_running_loop()
        if self._session is not None and self._owns_session and self._loop is not loop:
            # Sessions cannot be closed from another loop; drop the stale one.
            logger.debug("Event loop changed, replacing aiohttp session")
            self._session = None
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None))
            self._owns_session = True
            self._loop = loop
        return self._session

    async def post(
        self,
        url: str,
        *,
        headers: Headers,
        data: str,
        signal: AbortSignal | None = None,
    ) -> aiohttp.ClientResponse:
        """Send a POST request and return the unread ClientResponse."""
        session = await self._get_session()

        async def send() -> aiohttp.ClientResponse:
            return await session.post(url, data=data.encode("utf-8"), headers=headers.items())

        return await self._send_abortable(send, signal)

    async def close(self) -> None:
        """Close the aiohttp session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._loop = None
